from .models import Entry, LogLevel


class GenTrace(Entry, kw_only=True):
    gen_id: int
    gen_name: str
    status: str
    level: LogLevel = LogLevel.TRACE


class GenDebug(Entry, kw_only=True):
    gen_id: int
    gen_name: str
    status: str
    level: LogLevel = LogLevel.DEBUG


class GenWarning(Entry, kw_only=True):
    gen_id: int
    gen_name: str
    status: str
    level: LogLevel = LogLevel.WARN


class GenError(Entry, kw_only=True):
    gen_id: int
    gen_name: str
    status: str
    error: str
    level: LogLevel = LogLevel.ERROR
