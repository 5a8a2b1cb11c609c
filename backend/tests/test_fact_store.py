"""
States API Backend — Fact Store Unit Tests
===========================================

What:  Tests for the key-value store client over the `fact_sheets` table.
How:   Real in-memory SQLite for the happy paths; a mock session for
       database failures.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from states_api.exceptions import FactStoreError
from states_api.services.fact_store import FactStore


class TestFactStore:

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, db_session):
        store = FactStore(db_session)
        assert await store.get("TX") is None
        assert await store.get_for_update("TX") is None

    @pytest.mark.asyncio
    async def test_save_creates_then_overwrites(self, db_session):
        store = FactStore(db_session)

        created = await store.save("TX", ["one"])
        assert created.facts == ["one"]

        sheet = await store.get_for_update("TX")
        updated = await store.save("TX", ["one", "two"], sheet=sheet)

        assert updated is sheet
        assert (await store.get("TX")).facts == ["one", "two"]

    @pytest.mark.asyncio
    async def test_save_persists_across_sessions(self, db_engine, db_session):
        from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

        await FactStore(db_session).save("WA", ["rainy"])
        await db_session.commit()

        factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
        async with factory() as other:
            sheet = await FactStore(other).get("WA")

        assert sheet is not None
        assert sheet.facts == ["rainy"]

    @pytest.mark.asyncio
    async def test_list_all(self, db_session):
        store = FactStore(db_session)
        await store.save("TX", ["a"])
        await store.save("AK", [])

        assert await store.list_all() == {"TX": ["a"], "AK": []}

    @pytest.mark.asyncio
    async def test_read_failure_wrapped(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(FactStoreError) as exc_info:
            await FactStore(mock_db_session).get("TX")

        assert exc_info.value.context == {"operation": "get", "state_code": "TX"}

    @pytest.mark.asyncio
    async def test_list_failure_wrapped(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(FactStoreError):
            await FactStore(mock_db_session).list_all()

    @pytest.mark.asyncio
    async def test_write_failure_wrapped(self, mock_db_session):
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("dup"))

        with pytest.raises(FactStoreError, match="unavailable"):
            await FactStore(mock_db_session).save("TX", ["a"])

        mock_db_session.add.assert_called_once()
