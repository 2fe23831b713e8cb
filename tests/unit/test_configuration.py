"""Required environment settings fail fast when missing."""

import importlib.util

import pytest
from decouple import UndefinedValueError

import config

pytestmark = pytest.mark.unit

SETTINGS_PATH = config.__path__[0] + "/settings.py"


def _load_settings():
    spec = importlib.util.spec_from_file_location("_settings_under_test", SETTINGS_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestRequiredSettings:
    @pytest.mark.parametrize("name", ["DATABASE_URL", "PORT", "SECRET_KEY"])
    def test_missing_variable_is_rejected(self, monkeypatch, name):
        monkeypatch.delenv(name, raising=False)

        with pytest.raises(UndefinedValueError):
            _load_settings()

    def test_database_url_is_parsed(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://catalog:pw@db:5432/catalog")
        monkeypatch.setenv("PORT", "3000")

        settings = _load_settings()

        assert settings.DATABASES["default"]["NAME"] == "catalog"
        assert settings.DATABASES["default"]["HOST"] == "db"
        assert settings.PORT == 3000
