"""
Programmer-error exceptions raised by generator drivers and handles.

None of these are meant to be caught and retried. They surface at the
call that broke the producer/driver contract.
"""


class GeneratorError(Exception):
    pass


class UseAfterCompletionError(GeneratorError):
    """
    Raised when a generator is stepped after it has finished, either by
    returning, raising, or being closed.
    """

    pass


class ReentrancyViolationError(GeneratorError):
    """
    Raised when the producer and driver stop taking turns: a handoff is
    written while another is still pending, a value is read from the
    wrong direction, ``Co.yield_`` is used outside of its generator's
    active step, or a generator is stepped while already running.
    """

    pass


class ConstructionMismatchError(GeneratorError, TypeError):
    """
    Raised when a producer does not build a coroutine, or a value crossing
    the airlock does not match the types declared on the generator.
    """

    pass


class ExternalSuspensionError(GeneratorError):
    """
    Raised when a producer awaits something other than ``Co.yield_`` while
    being driven by a synchronous step. Use ``Gen.async_step`` (or one of
    the ``async_resume`` variants) for producers that wait on external
    sources.
    """

    pass
