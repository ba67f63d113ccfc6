"""Tests for settings defaults, env overrides and startup checks."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from kvedit.core.config import AppSettings, AuthConfig, ClientConfig, StoreConfig
from kvedit.core.startup_checks import validate_settings


class TestDefaults:
    def test_store_defaults(self) -> None:
        cfg = StoreConfig()
        assert cfg.backend == "file"
        assert cfg.path == Path("./data")
        assert cfg.s3_region == "auto"

    def test_auth_defaults(self) -> None:
        cfg = AuthConfig()
        assert cfg.token == ""
        assert cfg.cookie_secure is True
        assert set(AuthConfig.model_fields) == {"token", "cookie_secure"}

    def test_client_defaults(self) -> None:
        cfg = ClientConfig()
        assert cfg.snapshot_max_entries == 100
        assert cfg.timeout == 30.0

    def test_app_settings_aggregates(self) -> None:
        settings = AppSettings()
        assert isinstance(settings.store, StoreConfig)
        assert isinstance(settings.auth, AuthConfig)
        assert isinstance(settings.client, ClientConfig)


class TestEnvOverrides:
    def test_store_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KVEDIT_STORE_BACKEND", "s3")
        monkeypatch.setenv("KVEDIT_STORE_S3_BUCKET", "notes")
        monkeypatch.setenv("KVEDIT_STORE_S3_ENDPOINT_URL", "https://acct.r2.cloudflarestorage.com")
        cfg = StoreConfig()
        assert cfg.backend == "s3"
        assert cfg.s3_bucket == "notes"
        assert cfg.s3_endpoint_url == "https://acct.r2.cloudflarestorage.com"

    def test_auth_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KVEDIT_AUTH_TOKEN", "from-env")
        assert AuthConfig().token == "from-env"

    def test_invalid_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KVEDIT_STORE_BACKEND", "ftp")
        with pytest.raises(ValueError):
            StoreConfig()


class TestStartupChecks:
    def test_s3_without_bucket_fails(self) -> None:
        settings = AppSettings(store=StoreConfig(backend="s3", s3_bucket=""), auth=AuthConfig(token="t"))
        with pytest.raises(ValueError, match="KVEDIT_STORE_S3_BUCKET"):
            validate_settings(settings)

    def test_s3_with_bucket_passes(self) -> None:
        settings = AppSettings(store=StoreConfig(backend="s3", s3_bucket="notes"), auth=AuthConfig(token="t"))
        validate_settings(settings)

    def test_warns_without_token(self) -> None:
        settings = AppSettings(store=StoreConfig(backend="memory"), auth=AuthConfig(token=""))
        with patch("kvedit.core.startup_checks.log") as mock_log:
            validate_settings(settings)
            mock_log.warning.assert_called_once()

    def test_no_warning_when_configured(self) -> None:
        settings = AppSettings(store=StoreConfig(backend="memory"), auth=AuthConfig(token="t"))
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("ECS_CONTAINER_METADATA_URI", None)
            os.environ.pop("KUBERNETES_SERVICE_HOST", None)
            with patch("kvedit.core.startup_checks.log") as mock_log:
                validate_settings(settings)
                mock_log.warning.assert_not_called()

    def test_warns_for_file_store_in_container(self) -> None:
        settings = AppSettings(store=StoreConfig(backend="file"), auth=AuthConfig(token="t"))
        with patch.dict(os.environ, {"KUBERNETES_SERVICE_HOST": "10.0.0.1"}):
            with patch("kvedit.core.startup_checks.log") as mock_log:
                validate_settings(settings)
                mock_log.warning.assert_called_once()

    def test_s3_in_container_no_warning(self) -> None:
        settings = AppSettings(store=StoreConfig(backend="s3", s3_bucket="b"), auth=AuthConfig(token="t"))
        with patch.dict(os.environ, {"ECS_CONTAINER_METADATA_URI": "http://169.254.170.2/v4"}):
            with patch("kvedit.core.startup_checks.log") as mock_log:
                validate_settings(settings)
                mock_log.warning.assert_not_called()

    def test_app_startup_fails_fast(self) -> None:
        from fastapi.testclient import TestClient

        from kvedit.api.app import create_app

        settings = AppSettings(store=StoreConfig(backend="s3"), auth=AuthConfig(token="t"))
        with pytest.raises(ValueError, match="KVEDIT_STORE_S3_BUCKET"):
            with TestClient(create_app(settings)):
                pass
