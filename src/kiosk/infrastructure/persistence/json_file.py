"""A JSON list on disk shared by every repository instance and process.

All access goes through one lock file next to the data file, so a
read-modify-write in one process cannot interleave with another's.
Writes land in a temporary file that replaces the data file in one
step; readers never see a half-written file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from filelock import FileLock


class JsonFile:

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Reentrant: a repository may read while already holding it.
        self.lock = FileLock(f"{path}.lock")
        with self.lock:
            if not self.path.exists():
                self._replace([])

    def read(self) -> list[dict]:
        with self.lock:
            return json.loads(self.path.read_text(encoding="utf-8"))

    def write(self, records: list[dict]) -> None:
        with self.lock:
            self._replace(records)

    def _replace(self, records: list[dict]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(records, indent=2) + "\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
