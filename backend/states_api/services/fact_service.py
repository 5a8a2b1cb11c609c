"""
States API Backend — Fact Service (Merge & Mutation Layer)
===========================================================

What:  Merges catalog records with stored fun facts and performs the
       insert / update / delete operations on a state's fact list.
How:   Composes the read-only Catalog with a FactStore bound to the
       request's database session.
Who:   Called by the /states route handlers.

Operation Order (every method):
    1. Catalog lookup        → StateNotFoundError (404) for unknown codes
    2. Argument validation   → ValidationError (400), before any store access
    3. Store read            → FactNotFoundError (404) when there is nothing to act on
    4. Store write           → FactStoreError (500) on database failure

Fact Addressing:
    Clients address facts with a 1-based index; index i maps to list
    position i-1. Deleting shifts later facts left, so indexes stay dense.

Duplicate Policy:
    Duplicates are allowed. add_facts() appends verbatim without checking
    the existing list.
"""

import logging
import random
import re
from typing import Any, List, Optional

from states_api.exceptions import FactNotFoundError, ValidationError
from states_api.schemas.state import FactSheetResponse, StateRecord, StateView
from states_api.services.catalog import Catalog
from states_api.services.fact_store import FactStore

logger = logging.getLogger(__name__)

_INTEGER_TEXT = re.compile(r"-?[0-9]+")


class FactService:
    """
    Business logic for state views and fun-fact mutations.

    The catalog is shared; the store is per request. `rng` defaults to a
    `random.Random` seeded from OS entropy and can be injected in tests.
    """

    def __init__(
        self,
        catalog: Catalog,
        store: FactStore,
        rng: Optional[random.Random] = None,
    ):
        self.catalog = catalog
        self.store = store
        self.rng = rng or random.Random()

    # ── Read Path ─────────────────────────────────────────────────────────

    async def get_facts(self, code: str) -> List[str]:
        """Returns the state's facts in order; `[]` when none are stored."""
        record = self.catalog.lookup(code)
        sheet = await self.store.get(record.state_code)
        if sheet is None:
            return []
        return list(sheet.facts or [])

    async def get_random_fact(self, code: str) -> str:
        """
        Picks one of the state's facts uniformly at random.

        Raises:
            StateNotFoundError: unknown state code, checked before the store
            FactNotFoundError: the state has no facts
        """
        record = self.catalog.lookup(code)
        sheet = await self.store.get(record.state_code)
        facts = list(sheet.facts or []) if sheet is not None else []
        if not facts:
            raise FactNotFoundError(record.name)
        return self.rng.choice(facts)

    async def get_state(self, code: str) -> StateView:
        record = self.catalog.lookup(code)
        sheet = await self.store.get(record.state_code)
        return StateView.merge(record, sheet.facts if sheet is not None else [])

    async def list_states(self, contig: Optional[bool] = None) -> List[StateView]:
        """
        Merged views for every state matching the contiguity filter.

        All fact sheets are read in one query and joined in memory.
        """
        records = self.catalog.list(contig)
        facts_by_code = await self.store.list_all()
        return [
            StateView.merge(record, facts_by_code.get(record.state_code, []))
            for record in records
        ]

    # ── Mutations ─────────────────────────────────────────────────────────

    async def add_facts(self, code: str, new_facts: Any) -> FactSheetResponse:
        """
        Appends `new_facts` to the state's list, creating the list if needed.

        Raises:
            StateNotFoundError: unknown state code
            ValidationError: new_facts missing, not a list, empty, or holding
                             something other than non-blank strings
        """
        record = self.catalog.lookup(code)
        facts_to_add = _validate_new_facts(new_facts)

        sheet = await self.store.get_for_update(record.state_code)
        current = list(sheet.facts or []) if sheet is not None else []
        sheet = await self.store.save(record.state_code, current + facts_to_add, sheet=sheet)

        logger.info(
            "Added %d fun fact(s) to %s (now %d)",
            len(facts_to_add), record.state_code, len(sheet.facts),
        )
        return _to_response(record, sheet.facts)

    async def update_fact(self, code: str, index: Any, new_value: Any) -> FactSheetResponse:
        """
        Replaces the fact at 1-based `index` with `new_value`.

        Raises:
            StateNotFoundError: unknown state code
            ValidationError: index missing/not an integer, value missing/not a string
            FactNotFoundError: no facts stored, or index outside [1, len]
        """
        record = self.catalog.lookup(code)
        position = _validate_index(index)
        value = _validate_fact_value(new_value)

        sheet, facts = await self._load_for_mutation(record, position)
        facts[position - 1] = value
        sheet = await self.store.save(record.state_code, facts, sheet=sheet)

        logger.info("Updated fun fact %d for %s", position, record.state_code)
        return _to_response(record, sheet.facts)

    async def delete_fact(self, code: str, index: Any) -> FactSheetResponse:
        """
        Removes the fact at 1-based `index`; later facts shift down by one.

        Raises the same errors as update_fact().
        """
        record = self.catalog.lookup(code)
        position = _validate_index(index)

        sheet, facts = await self._load_for_mutation(record, position)
        del facts[position - 1]
        sheet = await self.store.save(record.state_code, facts, sheet=sheet)

        logger.info(
            "Deleted fun fact %d for %s (now %d)",
            position, record.state_code, len(sheet.facts),
        )
        return _to_response(record, sheet.facts)

    async def _load_for_mutation(self, record: StateRecord, position: int):
        """Locks the state's sheet and checks that `position` addresses a fact."""
        sheet = await self.store.get_for_update(record.state_code)
        facts = list(sheet.facts or []) if sheet is not None else []
        if not facts:
            raise FactNotFoundError(record.name)
        if not 1 <= position <= len(facts):
            raise FactNotFoundError(record.name, index=position)
        return sheet, facts


# ── Validation Helpers ────────────────────────────────────────────────────


def _validate_new_facts(new_facts: Any) -> List[str]:
    if new_facts is None:
        raise ValidationError("State fun facts value required", field="funfacts")
    if not isinstance(new_facts, (list, tuple)):
        raise ValidationError("State fun facts value must be an array", field="funfacts")
    if not new_facts:
        raise ValidationError(
            "State fun facts value must contain at least one fact", field="funfacts"
        )
    for fact in new_facts:
        if not isinstance(fact, str) or not fact.strip():
            raise ValidationError(
                "Each state fun fact must be a non-empty string", field="funfacts"
            )
    return list(new_facts)


def _validate_index(index: Any) -> int:
    if index is None:
        raise ValidationError("State fun fact index value required", field="index")
    # bool is an int subclass; True must not address fact 1
    if isinstance(index, bool):
        raise ValidationError("State fun fact index must be an integer", field="index")
    if isinstance(index, int):
        return index
    if isinstance(index, str) and _INTEGER_TEXT.fullmatch(index.strip()):
        return int(index.strip())
    raise ValidationError("State fun fact index must be an integer", field="index")


def _validate_fact_value(value: Any) -> str:
    if value is None:
        raise ValidationError("State fun fact value required", field="funfact")
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            "State fun fact value must be a non-empty string", field="funfact"
        )
    return value


def _to_response(record: StateRecord, facts: List[str]) -> FactSheetResponse:
    return FactSheetResponse(state_code=record.state_code, funfacts=list(facts))
