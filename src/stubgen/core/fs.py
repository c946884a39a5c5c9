from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import FileSystemError


def ensure_dir(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError(f"failed to create directory {path}: {exc}") from exc
    return path


def write_text_if_changed(path: Path, content: str, encoding: str = "utf-8") -> bool:
    """Write ``content`` unless the file already holds exactly those bytes.

    Returns True when the file was (re)written.
    """
    try:
        data = content.encode(encoding)
    except (LookupError, UnicodeError) as exc:
        raise FileSystemError(f"cannot encode {path} as {encoding}: {exc}") from exc
    try:
        if path.is_file() and path.read_bytes() == data:
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise FileSystemError(f"failed to write {path}: {exc}") from exc
    return True


def write_json(path: Path, payload: Any) -> Path:
    write_text_if_changed(path, json.dumps(payload, indent=2, sort_keys=True) + "\n")
    return path
