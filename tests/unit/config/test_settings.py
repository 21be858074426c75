"""Tests for application settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from indexsync.config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("INDEXSYNC_SEARCH__DRIVER", raising=False)
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.search.driver == "algolia"
        assert settings.search.soft_delete is False
        assert settings.algolia.app_id == ""
        assert settings.observability.log_format == "json"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INDEXSYNC_ALGOLIA__APP_ID", "ENVAPP")
        monkeypatch.setenv("INDEXSYNC_SEARCH__SOFT_DELETE", "true")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.algolia.app_id == "ENVAPP"
        assert settings.search.soft_delete is True

    def test_invalid_driver(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, search={"driver": "elastic"})  # type: ignore[call-arg]

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, observability={"log_format": "xml"})  # type: ignore[call-arg]

    def test_from_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "indexsync.yaml"
        config.write_text("algolia:\n  app_id: YAMLAPP\n  api_key: secret\nsearch:\n  driver: 'null'\n")

        settings = Settings.from_yaml(config)

        assert settings.algolia.app_id == "YAMLAPP"
        assert settings.search.driver == "null"

    def test_from_yaml_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "missing.yaml")
