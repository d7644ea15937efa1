from enum import Enum


class AirlockSlot(Enum):
    EMPTY = "EMPTY"
    HOLDING_YIELD = "HOLDING_YIELD"
    HOLDING_RESUME = "HOLDING_RESUME"
