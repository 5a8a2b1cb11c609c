"""
States API Backend — Reference Catalog
=======================================

What:  Immutable in-memory table of per-state reference data, keyed by
       two-letter state code.
How:   `load_catalog()` reads the JSON snapshot once during application
       startup; the resulting `Catalog` is stored on `app.state` and handed
       to request handlers through a FastAPI dependency.
Who:   FactService (every lookup) and the field-projection routes.

Snapshot Format:
    A JSON array of objects with the keys
    code, state, capital_city, nickname, admission_date (YYYY-MM-DD), population.
    Contiguity is not stored: it is derived from NON_CONTIGUOUS_CODES.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import aiofiles

from states_api.config import settings
from states_api.exceptions import StateNotFoundError
from states_api.schemas.state import StateRecord

logger = logging.getLogger(__name__)

# The two states not attached to the lower 48
NON_CONTIGUOUS_CODES = frozenset({"AK", "HI"})

DEFAULT_SNAPSHOT_PATH = Path(__file__).resolve().parent.parent / "data" / "states.json"


def normalize_code(code: str) -> str:
    """Upper-cases and trims a state code from a path parameter."""
    return (code or "").strip().upper()


class Catalog:
    """
    Read-only lookup table of StateRecord values.

    Iteration and `list()` preserve snapshot order. Instances are never
    mutated after construction, so one instance is shared by all requests
    without locking.
    """

    def __init__(self, records: Iterable[StateRecord]):
        ordered: Dict[str, StateRecord] = {}
        for record in records:
            if record.state_code in ordered:
                raise ValueError(f"Duplicate state code in snapshot: {record.state_code}")
            ordered[record.state_code] = record
        self._records: Mapping[str, StateRecord] = ordered

    @classmethod
    def from_records(cls, raw_records: Iterable[Mapping[str, Any]]) -> "Catalog":
        """Builds a catalog from snapshot-shaped dicts, validating each one."""
        return cls(_to_record(raw) for raw in raw_records)

    # ── Lookups ───────────────────────────────────────────────────────────

    def lookup(self, code: str) -> StateRecord:
        """
        Returns the record for `code` (case-insensitive).

        Raises:
            StateNotFoundError: `code` is not one of the catalog's keys
        """
        normalized = normalize_code(code)
        record = self._records.get(normalized)
        if record is None:
            raise StateNotFoundError(code)
        return record

    def list(self, contig: Optional[bool] = None) -> List[StateRecord]:
        """
        Returns records in snapshot order.

        contig=None returns everything, True drops the non-contiguous
        states and False returns only them.
        """
        if contig is None:
            return list(self._records.values())
        return [r for r in self._records.values() if r.is_contiguous is contig]

    @property
    def codes(self) -> Tuple[str, ...]:
        return tuple(self._records)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._records

    def __iter__(self) -> Iterator[StateRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


def _to_record(raw: Mapping[str, Any]) -> StateRecord:
    code = normalize_code(raw["code"])
    return StateRecord(
        state_code=code,
        name=raw["state"],
        capital=raw["capital_city"],
        nickname=raw["nickname"],
        population=raw["population"],
        admission_date=raw["admission_date"],
        is_contiguous=code not in NON_CONTIGUOUS_CODES,
    )


async def load_catalog(path: Optional[str] = None) -> Catalog:
    """
    Reads the state snapshot and builds the catalog.

    Args:
        path: Snapshot file. Defaults to STATES_DATA_PATH, then the bundled file.

    Raises:
        OSError: the file cannot be read
        ValueError: the file is not a JSON array of valid state entries
    """
    snapshot = Path(path or settings.states_data_path or DEFAULT_SNAPSHOT_PATH)
    async with aiofiles.open(snapshot, mode="r", encoding="utf-8") as f:
        content = await f.read()

    raw_records = json.loads(content)
    if not isinstance(raw_records, list):
        raise ValueError(f"State snapshot {snapshot} must contain a JSON array")

    try:
        catalog = Catalog.from_records(raw_records)
    except KeyError as e:
        raise ValueError(f"State snapshot {snapshot} entry is missing field {e}") from e

    logger.info("Loaded %d states from %s", len(catalog), snapshot)
    return catalog
