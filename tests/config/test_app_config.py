"""Tests for _app_config.py and the IntakeSettings group."""

import pytest
from pydantic import ValidationError

from ledger_intake.config._app_config import AppConfig
from ledger_intake.config._repository import FakeConfigRepository
from ledger_intake.config.settings import MAX_UPLOAD_BYTES, IntakeSettings


def _repo(**kwargs) -> FakeConfigRepository:
    return FakeConfigRepository(**kwargs)


class TestAppConfig:
    def test_prefix(self):
        class StoreConfig(AppConfig):
            class Meta:
                prefix = "store"

            path: str = "records.json"

        cfg = StoreConfig.load(repo=_repo(file={"store_path": "other.json"}))
        assert cfg.path == "other.json"

    def test_env_beats_file(self):
        class StoreConfig(AppConfig):
            class Meta:
                prefix = "store"
                env_prefix = "STORE"

            path: str = "records.json"

        cfg = StoreConfig.load(repo=_repo(env={"STORE_PATH": "env.json"}, file={"store_path": "file.json"}))
        assert cfg.path == "env.json"

    def test_missing_required_field_raises(self):
        class MyConfig(AppConfig):
            required_key: str

        with pytest.raises(ValidationError):
            MyConfig.load(repo=_repo())

    def test_frozen(self):
        class MyConfig(AppConfig):
            port: int = 8000

        cfg = MyConfig.load(repo=_repo())
        with pytest.raises(ValidationError):
            cfg.port = 1


class TestIntakeSettings:
    def test_defaults(self):
        settings = IntakeSettings.load(repo=_repo())
        assert settings.max_upload_bytes == MAX_UPLOAD_BYTES == 2 * 1024 * 1024
        assert settings.allowed_extensions == (".xlsx",)
        assert settings.date_policy == "any"
        assert settings.page_size == 20
        assert settings.store_path is None

    def test_nested_file_object(self):
        settings = IntakeSettings.load(
            repo=_repo(file={"intake": {"page_size": 50, "date_policy": "current_month"}})
        )
        assert settings.page_size == 50
        assert settings.date_policy == "current_month"

    def test_env_overrides(self):
        settings = IntakeSettings.load(
            repo=_repo(
                env={"LEDGER_INTAKE_MAX_UPLOAD_BYTES": "1024", "LEDGER_INTAKE_ALLOWED_EXTENSIONS": "xlsx, .xlsm"},
                file={"intake": {"max_upload_bytes": 4096}},
            )
        )
        assert settings.max_upload_bytes == 1024
        assert settings.allowed_extensions == (".xlsx", ".xlsm")

    @pytest.mark.parametrize(
        "values",
        [{"date_policy": "last_week"}, {"page_size": 0}, {"max_upload_bytes": -1}],
    )
    def test_invalid_values(self, values):
        with pytest.raises(ValidationError):
            IntakeSettings.load(repo=_repo(file={"intake": values}))
