# core/storage.py
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path, PurePosixPath

from pydantic import TypeAdapter

_URL_LIST = TypeAdapter(list[str])


def report_path(out_dir: Path, url_path: str) -> Path:
    """'/us/movie/dune' -> <out_dir>/dune.md"""
    return out_dir / f"{PurePosixPath(url_path).name}.md"


def write_text_atomic(target: Path, text: str) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_name = tempfile.mkstemp(prefix=target.name + ".", dir=target.parent)
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, target)
    except Exception:
        try:
            os.remove(tmp_name)
        except OSError:
            pass
        raise
    return target


def read_url_list(path: Path) -> list[str]:
    """Plik JSON z tablicą stringów (URL-e providerów)."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return _URL_LIST.validate_python(raw)
