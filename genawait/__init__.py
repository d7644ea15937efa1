from .adapters import (
    GenIterator as GenIterator,
    GenStream as GenStream,
)
from .core import (
    Co as Co,
    Completed as Completed,
    Gen as Gen,
    GeneratorState as GeneratorState,
    GenStatus as GenStatus,
    Yielded as Yielded,
)
from .env import (
    Env as Env,
    configure as configure,
)
from .exceptions import (
    ConstructionMismatchError as ConstructionMismatchError,
    ExternalSuspensionError as ExternalSuspensionError,
    GeneratorError as GeneratorError,
    ReentrancyViolationError as ReentrancyViolationError,
    UseAfterCompletionError as UseAfterCompletionError,
)
