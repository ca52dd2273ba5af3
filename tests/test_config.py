"""Tests for environment configuration and backend selection."""
from __future__ import annotations

from pathlib import Path

import pytest

from staking_storage.config import PACKAGE_DIR, Settings
from staking_storage.persistence import (
    RedisBackend,
    UpstashRestBackend,
    create_remote_backend,
    select_storage_mode,
)


def make_settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestSettings:
    """Tests for Settings loader."""

    def test_defaults(self):
        settings = make_settings()
        assert settings.redis_url is None
        assert settings.upstash_rest_url is None
        assert settings.key_prefix == "staking:"
        assert settings.resolved_data_dir == PACKAGE_DIR / "data"

    def test_data_dir_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        assert make_settings().resolved_data_dir == tmp_path

    def test_vercel_uses_tmp(self, monkeypatch):
        monkeypatch.setenv("VERCEL", "1")
        assert make_settings().resolved_data_dir == Path("/tmp/data")

    def test_data_dir_wins_over_vercel(self, monkeypatch, tmp_path):
        monkeypatch.setenv("VERCEL", "1")
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        assert make_settings().resolved_data_dir == tmp_path

    def test_upstash_aliases(self, monkeypatch):
        monkeypatch.setenv("UPSTASH_REDIS_URL", "https://eu1.upstash.io")
        monkeypatch.setenv("UPSTASH_REST_TOKEN", "tok")
        settings = make_settings()
        assert settings.upstash_rest_url == "https://eu1.upstash.io"
        assert settings.upstash_rest_token == "tok"

    def test_primary_upstash_names_win(self, monkeypatch):
        monkeypatch.setenv("UPSTASH_REDIS_REST_URL", "https://primary.upstash.io")
        monkeypatch.setenv("UPSTASH_REDIS_URL", "https://secondary.upstash.io")
        assert make_settings().upstash_rest_url == "https://primary.upstash.io"

    def test_blank_values_are_unset(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "")
        assert make_settings().redis_url is None


class TestSelectStorageMode:
    """Tests for backend selection priority."""

    def test_no_credentials_is_file(self):
        assert select_storage_mode(make_settings()) == "file"

    def test_redis_url(self):
        assert select_storage_mode(make_settings(redis_url="redis://localhost:6379")) == "redis"

    def test_redis_url_beats_upstash(self):
        settings = make_settings(
            redis_url="redis://localhost:6379",
            upstash_rest_url="https://eu1.upstash.io",
            upstash_rest_token="tok",
        )
        assert select_storage_mode(settings) == "redis"

    def test_upstash_url_and_token(self):
        settings = make_settings(upstash_rest_url="https://eu1.upstash.io", upstash_rest_token="tok")
        assert select_storage_mode(settings) == "upstash-rest"

    def test_upstash_rest_url_without_token_is_file(self):
        settings = make_settings(upstash_rest_url="https://eu1.upstash.io")
        assert select_storage_mode(settings) == "file"

    def test_upstash_redis_scheme_without_token_is_redis(self):
        settings = make_settings(upstash_rest_url="rediss://default:pw@eu1.upstash.io:6379")
        assert select_storage_mode(settings) == "redis"

    def test_upstash_redis_scheme_with_token_is_redis(self, monkeypatch):
        monkeypatch.setenv("UPSTASH_REDIS_URL", "rediss://default:pw@eu1.upstash.io:6379")
        monkeypatch.setenv("UPSTASH_REDIS_REST_TOKEN", "tok")
        settings = make_settings()

        assert select_storage_mode(settings) == "redis"
        assert isinstance(create_remote_backend(settings), RedisBackend)


class TestCreateRemoteBackend:
    """Tests for remote client construction."""

    def test_file_mode_has_no_remote(self):
        assert create_remote_backend(make_settings()) is None

    def test_redis_mode(self):
        backend = create_remote_backend(make_settings(redis_url="redis://localhost:6379/0"))
        assert isinstance(backend, RedisBackend)
        assert backend.mode == "redis"

    def test_upstash_mode(self):
        backend = create_remote_backend(
            make_settings(upstash_rest_url="https://eu1.upstash.io", upstash_rest_token="tok")
        )
        assert isinstance(backend, UpstashRestBackend)
        assert backend.mode == "upstash-rest"

    def test_construction_failure_falls_back(self, monkeypatch):
        def boom(*args, **kwargs):
            raise ValueError("bad url")

        monkeypatch.setattr("staking_storage.persistence.RedisBackend", boom)
        assert create_remote_backend(make_settings(redis_url="redis://x")) is None
