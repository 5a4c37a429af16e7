"""tailer — Follow a log file line by line across rotation.

Public API
----------
``Tailer``
    Blocking follow loop; run it on a thread.
``TailerListener``
    Base class for the callbacks a Tailer reports to.
``CollectingListener``
    Listener that stores everything it receives.
``TailerConfig``
    Validated polling/buffer/decoding settings.
``create_tailer``
    Factory with the default 100 ms delay and 4 KiB buffer.
"""
from __future__ import annotations

from inode_util.tailer.config import TailerConfig
from inode_util.tailer.helper import create_tailer
from inode_util.tailer.listener import CollectingListener, TailerListener
from inode_util.tailer.tailer import Tailer

__all__ = [
    "CollectingListener",
    "Tailer",
    "TailerConfig",
    "TailerListener",
    "create_tailer",
]
