# utils/io.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Union

# -------- Path helpers --------
PathLike = Union[str, Path]


def to_path(p: PathLike) -> Path:
    """Convert string-like to pathlib.Path."""
    return p if isinstance(p, Path) else Path(p)


def ensure_dir(p: PathLike) -> Path:
    """Ensure a directory exists and return it."""
    d = to_path(p)
    d.mkdir(parents=True, exist_ok=True)
    return d


def ensure_parent(path: PathLike) -> Path:
    """Ensure parent directory exists for a file path."""
    p = to_path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def list_files(folder: PathLike, pattern: str = "*") -> list[Path]:
    """List files matching a glob pattern (non-recursive)."""
    return sorted(p for p in to_path(folder).glob(pattern) if p.is_file())


def expand_inputs(paths: Iterable[PathLike], pattern: str = "*.json") -> list[Path]:
    """
    Flatten CLI inputs: directories expand to their matching files,
    anything else is passed through as-is (missing files included, so the
    caller can report them).
    """
    out: list[Path] = []
    for raw in paths:
        p = to_path(raw)
        if p.is_dir():
            out.extend(list_files(p, pattern))
        else:
            out.append(p)
    return out


# -------- Text / JSON --------
def read_text(path: PathLike, encoding: str = "utf-8") -> str:
    """Read a whole text file."""
    return to_path(path).read_text(encoding=encoding)


def read_json(path: PathLike) -> Any:
    """Load JSON file with UTF-8."""
    with to_path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: PathLike, data: Any, indent: int = 2) -> Path:
    """Write JSON atomically, pretty-formatted."""
    p = ensure_parent(path)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=indent)
    tmp.replace(p)
    return p
