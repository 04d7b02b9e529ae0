"""
Directory-backed key/value cache. One UTF-8 file per key.
"""

import re
from pathlib import Path
from typing import Optional, Union

DEFAULT_CACHE_DIR = "./.ember-telemetry-cache"


def safe_filename(value: str) -> str:
    return re.sub(r"[^\w\-]", "_", value)


class DiskCache:
    def __init__(self, root: Union[str, Path] = DEFAULT_CACHE_DIR):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / safe_filename(key)

    def set(self, key: str, value: str) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
        return path

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def has(self, key: str) -> bool:
        return self.path_for(key).exists()

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
