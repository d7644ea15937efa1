from .config import LoggingConfig as LoggingConfig
from .genawait_logger import (
    LOGGER_NAME as LOGGER_NAME,
    genawait_logger as genawait_logger,
)
from .genawait_logging_models import (
    GenDebug as GenDebug,
    GenError as GenError,
    GenTrace as GenTrace,
    GenWarning as GenWarning,
)
from .models import (
    Entry as Entry,
    Log as Log,
    LogLevel as LogLevel,
    LogLevelName as LogLevelName,
)
from .streams import (
    Logger as Logger,
    LoggerContext as LoggerContext,
    LoggerStream as LoggerStream,
)
