from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from .models import NormalizedIngredient


def serialize_catalog(catalog: Iterable[NormalizedIngredient]) -> str:
    records = [entry.model_dump(by_alias=True, mode="json") for entry in catalog]
    return json.dumps(records, indent=2, ensure_ascii=False)


def write_catalog(catalog: Iterable[NormalizedIngredient], path: Path) -> Path:
    """
    Write the catalog as one JSON document, replacing any previous file atomically.

    The document is written to a temporary file next to ``path`` and moved into
    place, so readers never observe a partial catalog.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    text = serialize_catalog(catalog)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
