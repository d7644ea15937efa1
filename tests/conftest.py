"""
Shared fixtures for genawait tests.

Async tests use pytest-asyncio via ``@pytest.mark.asyncio``.
"""

from typing import Generator

import pytest

from genawait.logging import LOGGER_NAME, LoggingConfig, genawait_logger


GENAWAIT_ENVARS = (
    "GENAWAIT_LOG_LEVEL",
    "GENAWAIT_LOG_OUTPUT",
    "GENAWAIT_LOG_PATH",
    "GENAWAIT_LOG_TEMPLATE",
)


class ExternalSignal:
    """
    Awaitable that suspends its caller on something other than
    ``Co.yield_``, the way a socket read or timer would.
    """

    def __init__(self, result=None) -> None:
        self.result = result

    def __await__(self):
        sent = yield self
        return self.result if sent is None else sent


@pytest.fixture(autouse=True)
def reset_logging_config() -> Generator[LoggingConfig, None, None]:
    config = LoggingConfig()
    config.reset()
    genawait_logger.configure(name=LOGGER_NAME)

    yield config

    config.reset()
    genawait_logger.configure(name=LOGGER_NAME)


@pytest.fixture(autouse=True)
def clear_genawait_envars(monkeypatch: pytest.MonkeyPatch):
    for envar in GENAWAIT_ENVARS:
        monkeypatch.delenv(envar, raising=False)


@pytest.fixture
def external_signal():
    return ExternalSignal


@pytest.fixture
def temp_log_directory(tmp_path) -> str:
    return str(tmp_path)
