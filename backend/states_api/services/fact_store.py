"""
States API Backend — Fun-Fact Store Client
===========================================

What:  Key-value access to FactSheet documents by state code.
How:   Thin wrapper around an AsyncSession: get-by-key, get-for-update,
       list-all and upsert-whole-record. Creation happens implicitly on the
       first upsert for a code.
Who:   FactService. Constructed per request around the request's session.

Error Handling:
    Any SQLAlchemyError is logged with its context and re-raised as
    FactStoreError (→ HTTP 500 with a generic message). Nothing is retried;
    the session dependency rolls the transaction back.
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from states_api.exceptions import FactStoreError
from states_api.models.fact_sheet import FactSheet

logger = logging.getLogger(__name__)


class FactStore:
    """Document-store view of the `fact_sheets` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, state_code: str) -> Optional[FactSheet]:
        """Returns the sheet for `state_code`, or None when none was ever written."""
        return await self._fetch(state_code, lock=False)

    async def get_for_update(self, state_code: str) -> Optional[FactSheet]:
        """
        Same as get(), but locks the row until the transaction ends.

        PostgreSQL emits SELECT ... FOR UPDATE; SQLite ignores the clause.
        """
        return await self._fetch(state_code, lock=True)

    async def list_all(self) -> Dict[str, List[str]]:
        """Returns every stored fact list keyed by state code."""
        try:
            result = await self.db.execute(select(FactSheet))
            sheets = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Fact store error listing fact sheets: %s", str(e))
            raise FactStoreError(context={"operation": "list_all"}) from e
        return {sheet.state_code: list(sheet.facts or []) for sheet in sheets}

    async def save(
        self,
        state_code: str,
        facts: Sequence[str],
        sheet: Optional[FactSheet] = None,
    ) -> FactSheet:
        """
        Upserts the whole fact list for `state_code`.

        Pass the sheet returned by get_for_update() to overwrite it; with
        sheet=None a new row is inserted. The change is flushed, not
        committed: the request's session dependency commits.
        """
        try:
            if sheet is None:
                sheet = FactSheet(state_code=state_code, facts=list(facts))
                self.db.add(sheet)
            else:
                sheet.facts = list(facts)
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Fact store error saving facts for %s: %s", state_code, str(e))
            raise FactStoreError(
                context={"operation": "save", "state_code": state_code}
            ) from e
        return sheet

    async def _fetch(self, state_code: str, lock: bool) -> Optional[FactSheet]:
        query = select(FactSheet).where(FactSheet.state_code == state_code)
        if lock:
            query = query.with_for_update()
        try:
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Fact store error reading facts for %s: %s", state_code, str(e))
            raise FactStoreError(
                context={"operation": "get", "state_code": state_code}
            ) from e
