from .gen_status import GenStatus as GenStatus
from .generator_state import (
    Completed as Completed,
    ExternalWait as ExternalWait,
    GeneratorState as GeneratorState,
    Yielded as Yielded,
)
