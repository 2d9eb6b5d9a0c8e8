"""
Helper scripts executed to query the host.

The scripts ship as text and are written to temporary files on demand; the
caller owns the returned file and must delete it.
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from enum import Enum
from pathlib import Path


class HelperScript(Enum):
    """Scripts run as subprocesses to locate Node.js and npm packages."""

    GET_PATH_TO_DEFAULT_NODE_UNIX = ("get_path_to_default_node", ".sh", "#!/bin/sh\nnpm root -g\n")
    GET_NODE_JS_EXECUTABLE = ("get_node_js_executable", ".js", "console.log(process.execPath);\n")

    def __init__(self, stem: str, suffix: str, content: str) -> None:
        self.stem = stem
        self.suffix = suffix
        self.content = content

    def materialize(self, directory: Path | None = None) -> Path:
        """
        Write the script to a new temporary file.

        Args:
            directory: Where to create the file (default: system temp dir)

        Returns:
            Absolute path of the written script
        """
        fd, name = tempfile.mkstemp(prefix=f"{self.stem}_", suffix=self.suffix, dir=directory)
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(self.content)
            path.chmod(path.stat().st_mode | stat.S_IXUSR)
        except BaseException:
            with contextlib.suppress(OSError):
                path.unlink()
            raise
        return path.resolve()


def dispose_script(path: Path | None) -> bool:
    """
    Delete a materialized script.

    Deletion errors are ignored.

    Returns:
        True if the file was removed
    """
    if path is None:
        return False
    try:
        path.unlink()
    except OSError:
        return False
    return True
