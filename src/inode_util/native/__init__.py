"""native — Filesystem status queries exposed as plain functions.

Public API
----------
``get_inode``
    Path in, inode number out; ``-1`` when the status query fails.
``stat_inode``
    Same query, returning a :class:`LookupResult` with the failure reason.
``run_lookup``
    Runs one :class:`LookupRequest`; :func:`stat_inode` is built on it.
``LookupRequest`` / ``LookupResult`` / ``LookupFailure``
    The request and result types behind :func:`stat_inode`.
``InodeLookupError``
    Raised by :meth:`LookupResult.unwrap` on failure.

Example
-------
::

    from inode_util.native import get_inode

    inode = get_inode("/etc/hosts")
    if inode == -1:
        ...
"""
from __future__ import annotations

from inode_util.native.lookup import (
    LOOKUP_FAILED,
    InodeLookupError,
    LookupFailure,
    LookupRequest,
    LookupResult,
    get_inode,
    getInode,
    inode_supported,
    run_lookup,
    stat_inode,
)

__all__ = [
    "LOOKUP_FAILED",
    "InodeLookupError",
    "LookupFailure",
    "LookupRequest",
    "LookupResult",
    "getInode",
    "get_inode",
    "inode_supported",
    "run_lookup",
    "stat_inode",
]
