"""Input/output helpers for the deduplication pipeline."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Dict, List, Mapping, Sequence, TextIO

from company_dedup.entities.core import DuplicateGroup
from company_dedup.utils.helpers import ensure_directory


def load_company_names(path: str | Path) -> List[str]:
    """Read one company name per line, stripping whitespace and dropping blanks.

    Raises:
        FileNotFoundError: if *path* does not exist.
        UnicodeDecodeError: if the file is not valid UTF-8.
    """

    with Path(path).open("r", encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]


def _atomic_write(destination: str | Path, writer, *, encoding: str = "utf-8") -> Path:
    """Write using a temporary file before atomically replacing the destination."""

    path = Path(destination).expanduser()
    ensure_directory(path.parent)

    tmp_path: Path | None = None
    tmp_handle = NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        tmp_path = Path(tmp_handle.name)
        try:
            writer(tmp_handle)
            tmp_handle.flush()
            os.fsync(tmp_handle.fileno())
        finally:
            tmp_handle.close()
        os.replace(tmp_path, path)
    except Exception:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except FileNotFoundError:  # pragma: no cover - race during cleanup
                pass
        raise
    return path


def generate_groups_payload(
    groups: Sequence[DuplicateGroup],
    stats: Mapping[str, Any],
    config_used: Mapping[str, Any],
) -> Dict[str, Any]:
    """Create the JSON payload describing a deduplication run."""

    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "config": dict(config_used),
        "stats": dict(stats),
        "groups": [
            {"index": index, **group.model_dump(mode="json")}
            for index, group in enumerate(groups, start=1)
        ],
    }


def write_groups(payload: Mapping[str, Any], destination: str | Path) -> Path:
    """Write a groups payload to JSON."""

    def _writer(handle: TextIO) -> None:
        handle.write(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n")

    return _atomic_write(destination, _writer)


__all__ = ["load_company_names", "generate_groups_payload", "write_groups"]
