"""Helpers for creating a Tailer with the usual defaults."""
from __future__ import annotations

import os

from inode_util.tailer.config import DEFAULT_BUFFER_SIZE, DEFAULT_DELAY_SECONDS, TailerConfig
from inode_util.tailer.listener import TailerListener
from inode_util.tailer.tailer import Tailer


def create_tailer(
    path: str | os.PathLike[str],
    listener: TailerListener,
    position: int = 0,
    delay: float = DEFAULT_DELAY_SECONDS,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    reopen: bool = False,
    encoding: str = "utf-8",
) -> Tailer:
    """Create a :class:`Tailer` for *path*.

    Parameters
    ----------
    path:
        The file to follow.
    listener:
        Receives lines and lifecycle events.
    position:
        Byte offset where tailing starts (default: beginning of file).
    delay:
        Seconds between checks for new content (default 0.1).
    buffer_size:
        Bytes per read (default 4096).
    reopen:
        Close and reopen the file between checks.
    encoding:
        Codec used to decode lines.

    Raises
    ------
    pydantic.ValidationError
        If any setting is out of range.
    """
    config = TailerConfig(
        delay=delay,
        buffer_size=buffer_size,
        reopen=reopen,
        encoding=encoding,
        position=position,
    )
    return Tailer(path, listener, config)
