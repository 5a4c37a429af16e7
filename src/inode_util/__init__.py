"""inode-util — Inode lookup and rotation-aware file tailing.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import inode_util
>>> inode_util.__version__
'0.1.0'

Quick start
-----------
::

    from inode_util import get_inode, stat_inode

    get_inode("/etc/hosts")           # inode number, or -1
    stat_inode("/missing").failure    # LookupFailure.NOT_FOUND
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ------------------------------------------------------------------
# Inode lookup
# ------------------------------------------------------------------
from inode_util.native.lookup import (
    LOOKUP_FAILED,
    InodeLookupError,
    LookupFailure,
    LookupRequest,
    LookupResult,
    get_inode,
    getInode,
    inode_supported,
    stat_inode,
)

# ------------------------------------------------------------------
# Tailer
# ------------------------------------------------------------------
from inode_util.tailer.config import TailerConfig
from inode_util.tailer.helper import create_tailer
from inode_util.tailer.listener import CollectingListener, TailerListener
from inode_util.tailer.tailer import Tailer

__all__ = [
    # version
    "__version__",
    # lookup
    "LOOKUP_FAILED",
    "InodeLookupError",
    "LookupFailure",
    "LookupRequest",
    "LookupResult",
    "getInode",
    "get_inode",
    "inode_supported",
    "stat_inode",
    # tailer
    "CollectingListener",
    "Tailer",
    "TailerConfig",
    "TailerListener",
    "create_tailer",
]
