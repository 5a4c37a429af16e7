#!/usr/bin/env python3
"""Example: Inode Lookup Quickstart

Looks up inode numbers with the sentinel API and with the richer
result API, including hard links and a missing path.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install inode-util
"""
from __future__ import annotations

import os
import tempfile

import inode_util
from inode_util import LookupFailure, get_inode, stat_inode


def main() -> None:
    print(f"inode-util version: {inode_util.__version__}")

    with tempfile.TemporaryDirectory() as workdir:
        # Step 1: Look up a freshly created file
        example = os.path.join(workdir, "example.txt")
        open(example, "w").close()
        print(f"\ninode({example}) = {get_inode(example)}")

        # Step 2: A hard link shares the inode
        link = os.path.join(workdir, "example-link.txt")
        os.link(example, link)
        print(f"inode({link}) = {get_inode(link)}")

        # Step 3: A missing path collapses to -1
        missing = os.path.join(workdir, "does-not-exist-xyz")
        print(f"inode({missing}) = {get_inode(missing)}")

        # Step 4: The richer API says why
        result = stat_inode(missing)
        print(f"\nstat_inode ok={result.ok} failure={result.failure.value}")
        assert result.failure is LookupFailure.NOT_FOUND


if __name__ == "__main__":
    main()
