from typing import TypeVar

from genawait.core.gen.gen_frame import GenFrame
from genawait.core.state import Completed, ExternalWait, Yielded
from genawait.exceptions import ExternalSuspensionError

Y = TypeVar("Y")
R = TypeVar("R")
C = TypeVar("C")


def sync_step(
    frame: GenFrame[Y, R, C],
    resume_value: R,
) -> Yielded[Y] | Completed[C]:
    frame.begin(resume_value)

    outcome = frame.advance()

    # Nothing outside the producer can wake it up when driven synchronously.
    if isinstance(outcome, ExternalWait):
        frame.abort(
            ExternalSuspensionError(
                f"Producer awaited {outcome.signal!r} while driven by a non-async method. "
                "Only Co.yield_ may be awaited under Gen.step/resume/resume_with - "
                "use Gen.async_step/async_resume/async_resume_with instead."
            )
        )

    return outcome
