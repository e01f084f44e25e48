from __future__ import annotations

import os
import sys
from typing import Any


def _birthtime(st: os.stat_result) -> float | None:
    bt = getattr(st, "st_birthtime", None)
    if bt is not None:
        return float(bt)
    # Before 3.12, Windows reported creation time in st_ctime.
    if sys.platform == "win32":
        return float(st.st_ctime)
    return None


def run(args: dict[str, Any]) -> dict[str, Any]:
    """
    Query timestamps for a single path (read-only; follows symlinks).
    args:
      - path: string
    output:
      - modified / created / accessed: float seconds since the epoch, or None
        when the platform does not expose that kind
    Raises OSError when no metadata is available for the path (an empty path
    is FileNotFoundError), ValueError for a path with an embedded NUL.
    """
    path_raw = args.get("path")
    if not isinstance(path_raw, str):
        raise ValueError("fs.stat: 'path' must be a string")

    st = os.stat(path_raw)
    return {
        "path": path_raw,
        "size": st.st_size,
        "modified": float(st.st_mtime),
        "created": _birthtime(st),
        "accessed": float(st.st_atime),
    }
