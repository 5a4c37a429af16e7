"""Inode lookup — resolves a filesystem path to its inode number.

:func:`get_inode` is the narrow call surface: it takes a path string and
returns the inode number reported by ``stat``, or ``-1`` when the status
query fails for any reason.  Nothing is raised and the failure reason is
not surfaced; every failure collapses to the single sentinel.

:func:`stat_inode` performs the same query but returns a
:class:`LookupResult` that also carries a :class:`LookupFailure` reason,
so callers that need diagnostics do not have to repeat the query.
:func:`get_inode` is a thin adapter over it.

Design notes
------------
- Symbolic links are followed (``stat``, not ``lstat``).  ``stat_inode``
  accepts ``follow_symlinks=False`` as an explicit opt-in.
- Inode numbers are a POSIX concept.  On other platforms every lookup
  fails with :attr:`LookupFailure.UNSUPPORTED_PLATFORM`.
- The path is converted to the native filesystem encoding for the
  duration of one call only; the encoded copy is released on every exit
  path.
- No state is shared between calls, so concurrent lookups from many
  threads are independent.
- ``st_ino`` is returned exactly as the host reports it.  Python integers
  are unbounded, so an inode at or above ``2**63`` (possible on some
  64-bit filesystems) stays a large non-negative number rather than
  wrapping to a negative value that could be mistaken for a failure.
"""
from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)

PathArg = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]

#: Value returned by :func:`get_inode` when the status query fails.
LOOKUP_FAILED: int = -1

INODE_SUPPORTED: bool = os.name == "posix"


class LookupFailure(str, Enum):
    """Reason a status query did not produce an inode number."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    SYMLINK_LOOP = "symlink_loop"
    NAME_TOO_LONG = "name_too_long"
    INVALID_PATH = "invalid_path"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    IO_ERROR = "io_error"


_ERRNO_FAILURES: dict[int, LookupFailure] = {
    errno.ENOENT: LookupFailure.NOT_FOUND,
    errno.EACCES: LookupFailure.PERMISSION_DENIED,
    errno.EPERM: LookupFailure.PERMISSION_DENIED,
    errno.ENOTDIR: LookupFailure.NOT_A_DIRECTORY,
    errno.ELOOP: LookupFailure.SYMLINK_LOOP,
    errno.ENAMETOOLONG: LookupFailure.NAME_TOO_LONG,
}


class InodeLookupError(Exception):
    """Raised by :meth:`LookupResult.unwrap` when the lookup failed.

    Parameters
    ----------
    path:
        The path that was queried.
    failure:
        Classified reason for the failure.
    err:
        The OS error number, when the failure came from the status call.
        Exposed as the ``errno`` attribute.
    message:
        Optional detail appended to the exception text.
    """

    def __init__(
        self,
        path: str,
        failure: LookupFailure,
        err: Optional[int] = None,
        message: str = "",
    ) -> None:
        self.path = path
        self.failure = failure
        self.errno = err
        detail = f": {message}" if message else ""
        super().__init__(f"Cannot read inode of {path!r} ({failure.value}){detail}")


@dataclass(frozen=True)
class LookupRequest:
    """A single inode lookup, constructed immediately before the call.

    Parameters
    ----------
    path:
        The filesystem entry to query.  Not validated before use.
    follow_symlinks:
        Resolve symbolic links before reading the inode (default ``True``).
    """

    path: PathArg
    follow_symlinks: bool = True

    def display_path(self) -> str:
        """Return the path as text, suitable for logs and error messages."""
        value = os.fspath(self.path)
        if isinstance(value, bytes):
            return os.fsdecode(value)
        return value


@dataclass(frozen=True)
class LookupResult:
    """Outcome of an inode lookup.

    ``inode`` is the inode number when ``failure`` is ``None`` and exactly
    ``-1`` otherwise.
    """

    path: str
    inode: int
    failure: Optional[LookupFailure] = None
    errno: Optional[int] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        """``True`` when the status query succeeded."""
        return self.failure is None

    def unwrap(self) -> int:
        """Return the inode number or raise :class:`InodeLookupError`."""
        if self.failure is not None:
            raise InodeLookupError(self.path, self.failure, self.errno, self.message)
        return self.inode

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dictionary."""
        return {
            "path": self.path,
            "inode": self.inode,
            "failure": self.failure.value if self.failure else None,
            "errno": self.errno,
            "message": self.message,
        }


def run_lookup(request: LookupRequest) -> LookupResult:
    """Run the status query described by *request*.

    Parameters
    ----------
    request:
        The path and link-following mode to query.

    Returns
    -------
    LookupResult
        The inode on success, or ``inode=-1`` with the classified failure.
    """
    display = _safe_display(request)

    if not INODE_SUPPORTED:
        return _failed(
            display,
            LookupFailure.UNSUPPORTED_PLATFORM,
            None,
            f"inode numbers are not available on {os.name!r}",
        )

    try:
        encoded = os.fsencode(request.path)
    except (TypeError, UnicodeError) as exc:
        return _failed(display, LookupFailure.INVALID_PATH, None, str(exc))

    try:
        st = os.stat(encoded, follow_symlinks=request.follow_symlinks)
    except OSError as exc:
        failure = _ERRNO_FAILURES.get(exc.errno, LookupFailure.IO_ERROR)
        return _failed(display, failure, exc.errno, exc.strerror or str(exc))
    except ValueError as exc:
        # embedded NUL byte
        return _failed(display, LookupFailure.INVALID_PATH, None, str(exc))
    finally:
        del encoded

    return LookupResult(path=display, inode=int(st.st_ino))


def stat_inode(path: PathArg, follow_symlinks: bool = True) -> LookupResult:
    """Look up the inode of *path* and report why it failed, if it did.

    Parameters
    ----------
    path:
        Path to query.  Empty or malformed paths are passed to the status
        call as-is and fail there.
    follow_symlinks:
        When ``True`` (default) a symbolic link reports the inode of its
        target.

    Returns
    -------
    LookupResult
    """
    return run_lookup(LookupRequest(path=path, follow_symlinks=follow_symlinks))


def get_inode(path: PathArg) -> int:
    """Return the inode number of *path*, or ``-1`` if it cannot be statted.

    Parameters
    ----------
    path:
        Path to query.  Symbolic links are followed.

    Returns
    -------
    int
        A non-negative inode number, or exactly ``-1``.
    """
    return stat_inode(path).inode


getInode = get_inode


def inode_supported() -> bool:
    """Return ``True`` when the host filesystem API exposes inode numbers."""
    return INODE_SUPPORTED


def _safe_display(request: LookupRequest) -> str:
    try:
        return request.display_path()
    except TypeError:
        return repr(request.path)


def _failed(
    path: str,
    failure: LookupFailure,
    err: Optional[int],
    message: str,
) -> LookupResult:
    logger.debug("Inode lookup failed for %r: %s (%s)", path, failure.value, message)
    return LookupResult(
        path=path,
        inode=LOOKUP_FAILED,
        failure=failure,
        errno=err,
        message=message,
    )
