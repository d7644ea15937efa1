from .airlock import (
    Airlock as Airlock,
    AirlockSlot as AirlockSlot,
)
from .co import (
    Co as Co,
    Suspension as Suspension,
)
from .gen import (
    Gen as Gen,
    GenFrame as GenFrame,
)
from .state import (
    Completed as Completed,
    GeneratorState as GeneratorState,
    GenStatus as GenStatus,
    Yielded as Yielded,
)
