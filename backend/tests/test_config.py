"""
States API Backend — Settings Tests
====================================

What:  Tests for Settings validation and derived properties.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from states_api.config import Settings


class TestSettings:

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_is_sqlite(self):
        assert Settings(database_url="sqlite+aiosqlite://").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://u:p@h/db").is_sqlite

    def test_startup_validation_accepts_defaults(self):
        Settings(states_data_path=None).validate_for_startup()

    def test_startup_validation_rejects_missing_snapshot(self, tmp_path):
        settings = Settings(states_data_path=str(tmp_path / "missing.json"))

        with pytest.raises(ValueError, match="STATES_DATA_PATH"):
            settings.validate_for_startup()

    def test_startup_validation_accepts_existing_snapshot(self, tmp_path):
        snapshot = tmp_path / "states.json"
        snapshot.write_text("[]")

        Settings(states_data_path=str(snapshot)).validate_for_startup()
