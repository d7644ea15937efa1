import asyncio
import contextvars
import datetime
import functools
import io
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import (
    Callable,
    Dict,
    TypeVar,
)

import msgspec

from genawait.logging.config import LoggingConfig, StreamType
from genawait.logging.models import Entry, Log

T = TypeVar('T', bound=Entry)


DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"
ERROR_TEMPLATE = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._files: Dict[str, io.BufferedRandom] = {}
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._config = LoggingConfig()
        self._closed = False

    @property
    def name(self):
        return self._name

    @property
    def closed(self):
        return self._closed

    def enabled(self, entry: Entry) -> bool:
        return self._closed is False and self._config.enabled(self._name, entry.level)

    def write(
        self,
        entry: T | Log[T],
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        logfile_path = self._resolve_logfile_path(path)

        if logfile_path:
            self._write_to_file(
                entry,
                logfile_path,
                filter=filter,
            )

        else:
            self._write_to_stream(
                entry,
                template=template,
                filter=filter,
            )

    async def log(
        self,
        entry: T | Log[T],
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if isinstance(entry, Entry):
            log_file, line_number, function_name = self._find_caller(depth=2)
            entry = Log(
                entry=entry,
                filename=log_file,
                function_name=function_name,
                line_number=line_number,
            )

        # Executor threads do not inherit contextvars, so carry the
        # caller's logging config over explicitly.
        context = contextvars.copy_context()

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            functools.partial(
                context.run,
                self.write,
                entry,
                template,
                path,
                filter,
            ),
        )

    def _resolve_logfile_path(self, path: str | None) -> str | None:
        filename: str | None = None
        directory: str | None = None

        if path is None:
            path = self._config.path

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        if filename is None:
            filename = self._default_logfile

        if directory is None:
            directory = self._default_log_directory

        if filename is None and directory is None:
            return None

        if filename is None:
            filename = "logs.json"

        if directory is None:
            directory = os.getcwd()

        return os.path.join(directory, filename)

    def _unwrap(self, entry_or_log: T | Log[T]) -> tuple[Entry, tuple[str, int, str]]:
        if isinstance(entry_or_log, Log):
            return entry_or_log.entry, (
                entry_or_log.filename,
                entry_or_log.line_number,
                entry_or_log.function_name,
            )

        return entry_or_log, self._find_caller(depth=4)

    def _write_to_stream(
        self,
        entry_or_log: T | Log[T],
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry, (log_file, line_number, function_name) = self._unwrap(entry_or_log)

        if self.enabled(entry) is False:
            return

        if filter and filter(entry) is False:
            return

        if template is None:
            template = self._default_template or DEFAULT_TEMPLATE

        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        try:
            stream.write(
                entry.to_template(
                    template,
                    context={
                        "filename": log_file,
                        "function_name": function_name,
                        "line_number": line_number,
                        "thread_id": threading.get_native_id(),
                        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                    },
                )
                + "\n"
            )
            stream.flush()

        except Exception as err:
            self._write_error(entry, err, log_file, line_number, function_name)

    def _write_to_file(
        self,
        entry_or_log: T | Log[T],
        logfile_path: str,
        filter: Callable[[T], bool] | None = None,
    ):
        entry, (log_file, line_number, function_name) = self._unwrap(entry_or_log)

        if self.enabled(entry) is False:
            return

        if filter and filter(entry) is False:
            return

        log = entry_or_log
        if not isinstance(log, Log):
            log = Log(
                entry=entry,
                filename=log_file,
                function_name=function_name,
                line_number=line_number,
            )

        with self._file_locks[logfile_path]:
            try:
                logfile = self._files.get(logfile_path)
                if logfile is None or logfile.closed:
                    logfile = self._open_file(logfile_path)

                logfile.write(msgspec.json.encode(log) + b"\n")
                logfile.flush()

            except Exception as err:
                self._write_error(entry, err, log_file, line_number, function_name)

    def _open_file(self, logfile_path: str):
        resolved_path = pathlib.Path(logfile_path).absolute().resolve()
        resolved_path.parent.mkdir(parents=True, exist_ok=True)

        logfile = open(str(resolved_path), "ab+")
        self._files[logfile_path] = logfile

        return logfile

    def _write_error(
        self,
        entry: Entry,
        err: Exception,
        log_file: str,
        line_number: int,
        function_name: str,
    ):
        if sys.stderr.closed:
            return

        sys.stderr.write(
            entry.to_template(
                ERROR_TEMPLATE,
                context={
                    "filename": log_file,
                    "function_name": function_name,
                    "line_number": line_number,
                    "error": str(err),
                    "thread_id": threading.get_native_id(),
                    "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                },
            )
            + "\n"
        )

    def _find_caller(self, depth: int):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(depth)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )

    def close(self):
        for logfile_path, logfile in list(self._files.items()):
            with self._file_locks[logfile_path]:
                if logfile.closed is False:
                    logfile.close()

        self._files.clear()
        self._closed = True
