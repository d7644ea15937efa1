from genawait.logging import LOGGER_NAME, LoggingConfig, genawait_logger

from .env import Env
from .load_env import load_env


def configure(
    env: Env | None = None,
    env_file: str | None = None,
) -> Env:
    """
    Load settings from the process environment and ``.env`` file (explicit
    ``env`` values win) and apply them to the logging configuration of the
    current context and to the package logger. Reconfiguring closes any log
    file the package logger had open.
    """
    env = load_env(Env, env_file=env_file, override=env)

    config = LoggingConfig()
    config.update(
        log_path=env.GENAWAIT_LOG_PATH,
        log_level=env.GENAWAIT_LOG_LEVEL,
        log_output=env.GENAWAIT_LOG_OUTPUT,
    )

    genawait_logger.configure(
        name=LOGGER_NAME,
        template=env.GENAWAIT_LOG_TEMPLATE,
        path=env.GENAWAIT_LOG_PATH,
    )

    return env
