"""TailerListener — callbacks a Tailer reports to.

Subclass and override the hooks you need; every hook defaults to a no-op.
All hooks run on the tailer thread.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inode_util.tailer.tailer import Tailer


class TailerListener:
    """Receives lines and file lifecycle events from a Tailer."""

    def init(self, tailer: "Tailer") -> None:
        """Called once from the Tailer constructor."""

    def stop(self) -> None:
        """Called when the tailer loop exits after :meth:`Tailer.stop`."""

    def file_not_found(self) -> None:
        """Called when the tailed path does not currently name a file."""

    def file_rotated(self) -> None:
        """Called when rotation or truncation is detected.

        Runs before the new file is opened, so :meth:`file_not_found` may
        follow if the replacement has not been created yet.
        """

    def handle(self, line: str, position: int, last_modified: float) -> None:
        """Handle one complete line.

        Parameters
        ----------
        line:
            The decoded line without its terminator.
        position:
            Byte offset just after the line terminator.
        last_modified:
            Modification time of the file being read, in seconds since the
            epoch.
        """

    def handle_error(self, exc: Exception) -> None:
        """Handle an exception that ended the tailer loop."""


class CollectingListener(TailerListener):
    """Listener that records every line and event it receives.

    Handy for tests and for short-lived tails where the caller inspects the
    collected lines after stopping the tailer.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.positions: list[int] = []
        self.rotations: int = 0
        self.not_found: int = 0
        self.errors: list[Exception] = []
        self.stopped: bool = False

    def stop(self) -> None:
        self.stopped = True

    def file_not_found(self) -> None:
        self.not_found += 1

    def file_rotated(self) -> None:
        self.rotations += 1

    def handle(self, line: str, position: int, last_modified: float) -> None:
        self.lines.append(line)
        self.positions.append(position)

    def handle_error(self, exc: Exception) -> None:
        self.errors.append(exc)
