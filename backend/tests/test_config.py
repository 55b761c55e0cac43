"""
PawMart Backend — Settings and Storage Handle Tests
=====================================================

What we test:
    ✅ Defaults let the process boot with nothing configured
    ✅ Environment variables override defaults
    ✅ missing_required() names each absent credential
    ✅ MongoDatabase.from_settings degrades instead of raising
"""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError as PydanticValidationError

from pawmart.config import Settings
from pawmart.database import MongoDatabase


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("MONGO_URI", "FB_SERVICE_KEY", "LOG_LEVEL", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.mongo_db_name == "petMartDB"
        assert settings.enforce_listing_ownership is True
        assert settings.cors_origins_list == ["*"]
        assert settings.backend_port == 8000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://localhost:27017")
        monkeypatch.setenv("ENFORCE_LISTING_OWNERSHIP", "false")
        monkeypatch.setenv("CORS_ORIGINS", "https://pawmart.example, http://localhost:5173")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = Settings(_env_file=None)

        assert settings.mongo_uri == "mongodb://localhost:27017"
        assert settings.enforce_listing_ownership is False
        assert settings.cors_origins_list == ["https://pawmart.example", "http://localhost:5173"]
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_missing_required_lists_both(self):
        settings = Settings(_env_file=None, mongo_uri="", fb_service_key="")
        problems = settings.missing_required()
        assert len(problems) == 2
        assert any("MONGO_URI" in p for p in problems)
        assert any("FB_SERVICE_KEY" in p for p in problems)

    def test_nothing_missing(self):
        settings = Settings(_env_file=None, mongo_uri="mongodb://db", fb_service_key="a2V5")
        assert settings.missing_required() == []


class TestMongoDatabaseFromSettings:

    def test_without_uri_has_no_client(self):
        database = MongoDatabase.from_settings(Settings(_env_file=None, mongo_uri=""))
        assert database.configured is False

    def test_unparseable_uri_has_no_client(self):
        database = MongoDatabase.from_settings(Settings(_env_file=None, mongo_uri="mongodb://localhost:notaport"))
        assert database.configured is False

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = MagicMock()
        database = MongoDatabase(client=client)
        await database.close()
        await database.close()
        assert database.configured is False
        client.close.assert_called_once()
