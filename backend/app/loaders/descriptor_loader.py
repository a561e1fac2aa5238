from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional
import logging
import time

import pandas as pd

from apimesh.descriptors import ServiceDescriptor, catalog_descriptors

_REQUIRED = ("id", "name", "type")


def _as_list(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, float) and pd.isna(value):
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v) for v in value]


def load_descriptors_from_processed(path: Path) -> List[ServiceDescriptor]:
    """
    Load descriptors from a processed table (JSON records or parquet).

    Rows missing an id/name/type, or declaring no capability, are
    skipped. Returns an empty list when the file does not exist.
    """
    if not path.exists():
        return []

    logger = logging.getLogger("apimesh.load_descriptors")
    t0 = time.perf_counter()

    if path.suffix == ".parquet":
        df = pd.read_parquet(path)
    else:
        df = pd.read_json(path, orient="records", dtype=False)

    missing = [c for c in _REQUIRED if c not in df.columns]
    if missing:
        raise ValueError(f"descriptor table {path} lacks columns: {missing}")

    descriptors: List[ServiceDescriptor] = []
    skipped = 0
    for row in df.to_dict(orient="records"):
        capabilities = _as_list(row.get("capabilities"))
        if not capabilities or any(pd.isna(row.get(c)) for c in _REQUIRED):
            skipped += 1
            continue

        description = row.get("description")
        descriptors.append(
            ServiceDescriptor.create(
                id=str(row["id"]),
                name=str(row["name"]),
                type=str(row["type"]),
                description="" if description is None or pd.isna(description) else str(description),
                endpoints=_as_list(row.get("endpoints")),
                capabilities=capabilities,
                source=str(row.get("source") or path),
            )
        )

    logger.info(
        "read descriptors=%d (skipped=%d) from %s in %.3fs",
        len(descriptors),
        skipped,
        path,
        time.perf_counter() - t0,
    )
    return descriptors


def load_descriptors(
    path: Optional[Path],
    catalog_keys: Iterable[str] = (),
) -> List[ServiceDescriptor]:
    """
    Processed table if present, else the built-in catalog.
    """
    if path is not None:
        loaded = load_descriptors_from_processed(path)
        if loaded:
            return loaded

    keys = list(catalog_keys) or None
    return catalog_descriptors(keys)
