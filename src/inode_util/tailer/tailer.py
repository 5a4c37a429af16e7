"""Tailer — follows a growing text file across log rotation.

A :class:`Tailer` polls a file for appended bytes and reports each
complete line to a :class:`~inode_util.tailer.listener.TailerListener`.
Rotation is detected by comparing the inode the path currently names
(:func:`~inode_util.native.lookup.get_inode`) with the inode of the handle
being read.  When they differ, whatever is left in the old file is read
first, then the listener is told about the rotation and the new file is
followed from its beginning.  A file that shrinks below the read position
is treated as truncated and re-read from offset 0.

The loop in :meth:`Tailer.run` blocks; run it on a dedicated thread::

    tailer = create_tailer("/var/log/app.log", listener)
    thread = threading.Thread(target=tailer.run, daemon=True)
    thread.start()
    ...
    tailer.stop()
    thread.join()

Line splitting
--------------
``\\n`` ends a line, so blank lines are reported.  ``\\r`` ends a line only
when text is pending, so ``\\r\\n`` yields one line.  A trailing partial
line is held back until its terminator arrives.
"""
from __future__ import annotations

import logging
import os
import threading
from typing import BinaryIO, Optional

from inode_util.native.lookup import LOOKUP_FAILED, get_inode
from inode_util.tailer.config import TailerConfig
from inode_util.tailer.listener import TailerListener

logger = logging.getLogger(__name__)

_LF = 0x0A
_CR = 0x0D


class Tailer:
    """Follows one file path, reporting new lines to a listener.

    Parameters
    ----------
    path:
        The file to follow.  It does not need to exist yet.
    listener:
        Receives lines and lifecycle events.  Its ``init`` hook is called
        from this constructor.
    config:
        Polling and decoding settings.  Defaults to :class:`TailerConfig`.
    position:
        Starting byte offset, overriding ``config.position``.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        listener: TailerListener,
        config: Optional[TailerConfig] = None,
        *,
        position: Optional[int] = None,
    ) -> None:
        self._path: str = os.fspath(path)
        self._config: TailerConfig = config or TailerConfig()
        start = self._config.position if position is None else position
        if start < 0:
            raise ValueError(f"position must be >= 0, got {start}")
        self._position: int = start
        self._inode: int = LOOKUP_FAILED
        self._announced_inode: int = LOOKUP_FAILED
        self._after_cr: bool = False
        self._stop_event = threading.Event()
        self._resume_event = threading.Event()
        self._resume_event.set()

        self._listener = listener
        self._listener.init(self)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Let the loop finish its current step and return."""
        self._stop_event.set()
        self._resume_event.set()

    def pause(self) -> None:
        """Stop reading until :meth:`resume` is called."""
        self._resume_event.clear()

    def resume(self) -> None:
        """Continue reading after :meth:`pause`."""
        self._resume_event.set()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def delay(self) -> float:
        """Seconds between checks for new content."""
        return self._config.delay

    @property
    def config(self) -> TailerConfig:
        return self._config

    @property
    def position(self) -> int:
        """Byte offset of the next unread byte in the current file."""
        return self._position

    @property
    def inode(self) -> int:
        """Inode of the file currently being read, or ``-1`` before opening."""
        return self._inode

    @property
    def running(self) -> bool:
        return not self._stop_event.is_set()

    @property
    def paused(self) -> bool:
        return not self._resume_event.is_set()

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Follow the file until :meth:`stop` is called.

        Exceptions end the loop and are passed to
        :meth:`TailerListener.handle_error`; they are not re-raised.
        """
        reader: Optional[BinaryIO] = None
        try:
            while self.running and reader is None:
                reader = self._open()
                if reader is None:
                    self._listener.file_not_found()
                    self._sleep()
                else:
                    reader.seek(self._position)
                    logger.info(
                        "Tailing %s (inode %d) from position %d",
                        self._path,
                        self._inode,
                        self._position,
                    )

            while self.running:
                while self.paused and self.running:
                    self._resume_event.wait(self.delay)
                if not self.running:
                    break

                self._position = self._read_lines(reader)

                replacement = self._check_rotation(reader)
                if replacement is not None:
                    reader = replacement
                    continue

                self._sleep()

                if self._config.reopen and self.running:
                    reader = self._reopen(reader)

            self._listener.stop()
        except Exception as exc:
            logger.debug("Tailer for %s stopped by %r", self._path, exc)
            self._listener.handle_error(exc)
        finally:
            _close_quietly(reader)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _sleep(self) -> None:
        self._stop_event.wait(self.delay)

    def _open_handle(self) -> Optional[tuple[BinaryIO, int]]:
        """Open the path for reading and return the handle and its inode.

        Returns None when the path cannot be opened as a regular readable
        file: missing, permission denied, a directory, and so on.
        """
        try:
            handle = open(self._path, "rb")
        except OSError as exc:
            logger.debug("Cannot open %s: %r", self._path, exc)
            return None
        try:
            inode = os.fstat(handle.fileno()).st_ino
        except OSError as exc:
            logger.debug("Cannot stat open handle for %s: %r", self._path, exc)
            _close_quietly(handle)
            return None
        return handle, inode

    def _open(self) -> Optional[BinaryIO]:
        """Open the path and record its inode, or return None if unreadable."""
        opened = self._open_handle()
        if opened is None:
            return None
        reader, self._inode = opened
        self._announced_inode = self._inode
        return reader

    def _reopen(self, reader: BinaryIO) -> BinaryIO:
        """Swap *reader* for a fresh handle on the same file.

        The old handle is kept when the path cannot be opened or now names
        a different file; the next rotation check deals with that.
        """
        opened = self._open_handle()
        if opened is None:
            return reader
        fresh, inode = opened
        if inode != self._inode:
            _close_quietly(fresh)
            return reader
        reader.close()
        fresh.seek(self._position)
        return fresh

    def _check_rotation(self, reader: BinaryIO) -> Optional[BinaryIO]:
        """Detect rotation or truncation.

        Returns the handle to continue with when the loop should restart
        immediately, or ``None`` when nothing changed.
        """
        current = get_inode(self._path)

        if current == LOOKUP_FAILED:
            # moved away and not yet replaced; keep draining the old handle
            self._listener.file_not_found()
            return None

        if current != self._inode:
            self._position = self._read_lines(reader)
            if current != self._announced_inode:
                logger.info(
                    "Detected rotation of %s (inode %d -> %d)",
                    self._path,
                    self._inode,
                    current,
                )
                self._announced_inode = current
                self._listener.file_rotated()

            fresh = self._open()
            if fresh is None:
                # replacement exists but is unreadable; old handle stays open
                self._listener.file_not_found()
                return None
            self._position = 0
            self._after_cr = False
            # close the old file only once the new one is open
            _close_quietly(reader)
            return fresh

        size = os.fstat(reader.fileno()).st_size
        if size < self._position:
            logger.info(
                "Detected truncation of %s (size %d < position %d)",
                self._path,
                size,
                self._position,
            )
            self._listener.file_rotated()
            self._position = 0
            self._after_cr = False
            reader.seek(0)
            return reader

        return None

    def _read_lines(self, reader: BinaryIO) -> int:
        """Read available bytes and dispatch complete lines.

        Returns the offset just after the last line terminator seen; the
        reader is left positioned there so a partial line is re-read on
        the next call.

        ``_after_cr`` is set when a ``\\r`` has just ended a line and
        survives between calls, so the ``\\n`` of a ``\\r\\n`` pair is
        swallowed even when it arrives in a later chunk or a later poll.
        """
        line = bytearray()
        pos = reader.tell()
        resume_at = pos
        buffer_size = self._config.buffer_size

        while self.running:
            chunk = reader.read(buffer_size)
            if not chunk:
                break
            last_modified = os.fstat(reader.fileno()).st_mtime
            for i, byte in enumerate(chunk):
                if byte == _LF:
                    if not self._after_cr:
                        self._dispatch(line, pos + i + 1, last_modified)
                    line.clear()
                    self._after_cr = False
                    resume_at = pos + i + 1
                elif byte == _CR:
                    self._after_cr = bool(line)
                    if line:
                        self._dispatch(line, pos + i + 1, last_modified)
                        line.clear()
                    resume_at = pos + i + 1
                else:
                    self._after_cr = False
                    line.append(byte)
            pos += len(chunk)

        reader.seek(resume_at)
        return resume_at

    def _dispatch(self, line: bytearray, position: int, last_modified: float) -> None:
        text = line.decode(self._config.encoding, errors="replace")
        self._listener.handle(text, position, last_modified)

    def __repr__(self) -> str:
        return (
            f"Tailer(path={self._path!r}, position={self._position}, "
            f"inode={self._inode}, running={self.running})"
        )


def _close_quietly(reader: Optional[BinaryIO]) -> None:
    if reader is None:
        return
    try:
        reader.close()
    except OSError:
        logger.debug("Ignoring error while closing tailed file", exc_info=True)
