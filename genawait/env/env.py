from typing import Callable, Dict, Literal, Optional, Union

from pydantic import BaseModel, StrictStr

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    GENAWAIT_LOG_LEVEL: StrictStr = "info"
    GENAWAIT_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    GENAWAIT_LOG_PATH: Optional[StrictStr] = None
    GENAWAIT_LOG_TEMPLATE: Optional[StrictStr] = None

    @classmethod
    def types_map(self) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "GENAWAIT_LOG_LEVEL": str,
            "GENAWAIT_LOG_OUTPUT": str,
            "GENAWAIT_LOG_PATH": str,
            "GENAWAIT_LOG_TEMPLATE": str,
        }
