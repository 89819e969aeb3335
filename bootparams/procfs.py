"""Access to the command line the running kernel was booted with"""
import logging
import threading
import typing
from .constants import PROC_CMDLINE
from .kernel import Cmdline

logger = logging.getLogger(__name__)


class CmdlineReadError(OSError):
    """Raised when the kernel command line source can not be read"""


def read_cmdline(source: str = PROC_CMDLINE) -> Cmdline:
    """reads and parses a command line file"""
    try:
        with open(source, "r", encoding="utf-8", errors="surrogateescape") as _f:
            line = _f.read()
    except OSError as ex:
        raise CmdlineReadError(f"Could not read kernel command line from {source}: {ex}") from ex

    logger.debug(f"Read kernel command line from {source}: {line.strip()}")
    return Cmdline(line)


_lock = threading.Lock()
_instance: "typing.Optional[Cmdline]" = None
_error: "typing.Optional[Exception]" = None
_reader: "typing.Callable[[], Cmdline]" = read_cmdline


def proc_cmdline() -> Cmdline:
    """Returns the command line of the running kernel.

    The source is read once, on first use, and the result is shared by every
    caller. If that read fails the CmdlineReadError is raised to the first
    caller and to everyone after it, the read is not retried.
    """
    global _instance, _error
    with _lock:
        if _instance is None and _error is None:
            try:
                _instance = _reader()
            except Exception as ex:
                logger.error(f"Kernel command line unavailable: {ex}")
                _error = ex

        if _error is not None:
            raise CmdlineReadError(f"Kernel command line unavailable: {_error}") from _error

        return _instance


def reset_proc_cmdline(reader: "typing.Optional[typing.Callable[[], Cmdline]]" = None):
    """forgets the shared command line, optionally swapping the reader"""
    global _instance, _error, _reader
    with _lock:
        _instance = None
        _error = None
        _reader = reader or read_cmdline
