#!/usr/bin/env python3
"""Example: Tailing a Log File Across Rotation

Starts a Tailer on a background thread, writes some lines, rotates the
file the way logrotate does (rename, then recreate), and writes more.

Usage:
    python examples/02_tail_rotation.py

Requirements:
    pip install inode-util
"""
from __future__ import annotations

import os
import tempfile
import threading
import time

from inode_util import TailerListener, create_tailer


class PrintingListener(TailerListener):
    def file_rotated(self) -> None:
        print("  -- rotation detected --")

    def handle(self, line: str, position: int, last_modified: float) -> None:
        print(f"  [{position:>4}] {line}")


def _append(path: str, prefix: str, count: int) -> None:
    with open(path, "a", encoding="utf-8") as handle:
        for i in range(count):
            handle.write(f"{prefix} line {i}\n")


def main() -> None:
    with tempfile.TemporaryDirectory() as workdir:
        log_path = os.path.join(workdir, "app.log")
        _append(log_path, "old", 3)

        tailer = create_tailer(log_path, PrintingListener(), delay=0.05)
        thread = threading.Thread(target=tailer.run, daemon=True)
        thread.start()
        time.sleep(0.3)

        os.rename(log_path, log_path + ".1")
        _append(log_path, "new", 3)
        time.sleep(0.3)

        tailer.stop()
        thread.join()


if __name__ == "__main__":
    main()
