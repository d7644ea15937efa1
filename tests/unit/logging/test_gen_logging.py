import asyncio

import msgspec
import pytest

from genawait import Co, Gen
from genawait.logging import (
    Entry,
    GenDebug,
    LoggerStream,
    LoggingConfig,
    LogLevel,
)


async def one_then_done(co: Co[int, None]) -> str:
    await co.yield_(1)
    return "done"


class TestLogLevel:
    def test_to_level_accepts_names(self):
        assert LogLevel.to_level("trace") == LogLevel.TRACE
        assert LogLevel.to_level(" Error ") == LogLevel.ERROR
        assert LogLevel.to_level("warning") == LogLevel.WARN

    def test_to_level_rejects_unknown_names(self):
        with pytest.raises(ValueError, match="Unknown log level 'loud'"):
            LogLevel.to_level("loud")


class TestLoggingConfig:
    def test_default_level_is_info(self, reset_logging_config: LoggingConfig):
        assert reset_logging_config.level == LogLevel.INFO
        assert reset_logging_config.enabled("genawait", LogLevel.INFO) is True
        assert reset_logging_config.enabled("genawait", LogLevel.DEBUG) is False

    def test_disable_and_enable(self, reset_logging_config: LoggingConfig):
        reset_logging_config.disable("genawait", "genawait")
        assert reset_logging_config.enabled("genawait", LogLevel.FATAL) is False
        assert reset_logging_config.enabled("other", LogLevel.FATAL) is True

        reset_logging_config.enable("genawait")
        assert reset_logging_config.enabled("genawait", LogLevel.FATAL) is True


class TestLoggerStream:
    def test_writes_through_template(self, capsys: pytest.CaptureFixture[str]):
        stream = LoggerStream(name="test", template="{level}:{message}")

        stream.write(Entry(message="hello", level=LogLevel.INFO))
        stream.write(Entry(message="hidden", level=LogLevel.DEBUG))

        assert capsys.readouterr().err == "INFO:hello\n"

    def test_writes_to_configured_output(
        self,
        capsys: pytest.CaptureFixture[str],
        reset_logging_config: LoggingConfig,
    ):
        reset_logging_config.update(log_output="stdout")
        stream = LoggerStream(name="test", template="{message}")

        stream.write(Entry(message="hello", level=LogLevel.WARN))

        captured = capsys.readouterr()
        assert captured.out == "hello\n"
        assert captured.err == ""

    @pytest.mark.asyncio
    async def test_async_log_honors_caller_config(
        self,
        capsys: pytest.CaptureFixture[str],
        reset_logging_config: LoggingConfig,
    ):
        reset_logging_config.update(log_level="debug")
        stream = LoggerStream(name="test", template="{level}:{message}")

        await stream.log(Entry(message="from executor", level=LogLevel.DEBUG))

        assert capsys.readouterr().err == "DEBUG:from executor\n"

    def test_appends_json_lines_to_file(self, temp_log_directory: str):
        stream = LoggerStream(name="test", directory=temp_log_directory)

        stream.write(Entry(message="first", level=LogLevel.INFO))
        stream.write(Entry(message="second", level=LogLevel.ERROR))
        stream.close()

        with open(f"{temp_log_directory}/logs.json", "rb") as logfile:
            lines = [msgspec.json.decode(line) for line in logfile.read().splitlines()]

        assert [line["entry"]["message"] for line in lines] == ["first", "second"]
        assert lines[0]["function_name"] == "test_appends_json_lines_to_file"
        assert stream.closed is True


class TestGenLogging:
    def test_silent_at_default_level(self, capsys: pytest.CaptureFixture[str]):
        assert list(Gen(one_then_done)) == [1]
        assert capsys.readouterr().err == ""

    def test_trace_logs_each_step(
        self,
        capsys: pytest.CaptureFixture[str],
        reset_logging_config: LoggingConfig,
    ):
        reset_logging_config.update(log_level="trace")

        gen = Gen(one_then_done, name="numbers")
        gen.resume()
        gen.resume()

        err = capsys.readouterr().err
        assert "Created generator" in err
        assert "Yielded 1" in err
        assert "Completed with 'done'" in err

    def test_errors_logged_at_default_level(self, capsys: pytest.CaptureFixture[str]):
        async def fails(co: Co[int, None]):
            raise RuntimeError("producer failed")

        with pytest.raises(RuntimeError):
            Gen(fails).resume()

        assert "Generator failed with RuntimeError" in capsys.readouterr().err

    def test_disabled_logger_is_silent(
        self,
        capsys: pytest.CaptureFixture[str],
        reset_logging_config: LoggingConfig,
    ):
        reset_logging_config.update(log_level="trace")
        reset_logging_config.disable("genawait")

        assert list(Gen(one_then_done)) == [1]
        assert capsys.readouterr().err == ""

    def test_close_logged_at_debug(
        self,
        capsys: pytest.CaptureFixture[str],
        reset_logging_config: LoggingConfig,
    ):
        reset_logging_config.update(log_level="debug")

        gen = Gen(one_then_done)
        gen.resume()
        gen.close()

        assert "Closed generator before completion (was SUSPENDED)" in capsys.readouterr().err

    def test_file_entries_carry_gen_id(
        self,
        temp_log_directory: str,
        reset_logging_config: LoggingConfig,
    ):
        logfile_path = f"{temp_log_directory}/gens.json"
        reset_logging_config.update(log_path=logfile_path, log_level="trace")

        gen = Gen(one_then_done, name="numbers")
        assert list(gen) == [1]

        with open(logfile_path, "rb") as logfile:
            lines = [msgspec.json.decode(line) for line in logfile.read().splitlines()]

        assert len(lines) == 3
        assert {line["entry"]["gen_id"] for line in lines} == {gen.gen_id}
        assert {line["entry"]["gen_name"] for line in lines} == {"numbers"}
        assert lines[0]["entry"]["level"] == GenDebug(
            gen_id=gen.gen_id,
            gen_name="numbers",
            status="NOT_STARTED",
        ).level.value

    @pytest.mark.asyncio
    async def test_async_steps_are_traced(
        self,
        capsys: pytest.CaptureFixture[str],
        reset_logging_config: LoggingConfig,
    ):
        reset_logging_config.update(log_level="trace")

        async def sleeps(co: Co[int, None]):
            await asyncio.sleep(0)
            await co.yield_(7)

        gen = Gen(sleeps)
        await gen.async_resume()

        assert "Yielded 7" in capsys.readouterr().err

    def test_completion_logged_at_debug(
        self,
        capsys: pytest.CaptureFixture[str],
        reset_logging_config: LoggingConfig,
    ):
        reset_logging_config.update(log_level="debug")

        assert list(Gen(one_then_done)) == [1]

        err = capsys.readouterr().err
        assert "Completed with 'done'" in err
        assert "Yielded 1" not in err
