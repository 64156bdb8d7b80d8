from __future__ import annotations

from pathlib import Path

import pytest

from gwuptime.config import UptimeConfig
from gwuptime.exceptions import UptimeConfigError
from gwuptime.monitor import build_blob_store
from gwuptime.storage import FileBlobStore


def test_from_env_reads_gist_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_GIST_ID", "abc123")
    monkeypatch.setenv("GITHUB_TOKEN", "tok")
    monkeypatch.setenv("UPTIME_TICK_ROUND_MINUTES", "5")

    config = UptimeConfig.from_env()

    assert config.gist_id == "abc123"
    assert config.github_token == "tok"
    assert config.tick_round_minutes == 5
    assert config.time_zone == "Europe/Lisbon"
    config.validate()


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPTIME_STORAGE", "gist")
    monkeypatch.setenv("UPTIME_STORE_DIR", "/tmp/ignored")
    config = UptimeConfig.from_env(storage="memory")
    assert config.storage == "memory"
    assert config.store_dir == Path("/tmp/ignored")


def test_from_env_rejects_non_integer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPTIME_STEP_MINUTES", "hourly")
    with pytest.raises(UptimeConfigError):
        UptimeConfig.from_env()


def test_token_not_in_repr() -> None:
    assert "secret" not in repr(UptimeConfig(github_token="secret"))


@pytest.mark.parametrize(
    "config",
    [
        UptimeConfig(storage="gist"),
        UptimeConfig(storage="file"),
        UptimeConfig(storage="s3"),
        UptimeConfig(storage="memory", tick_round_minutes=-1),
        UptimeConfig(storage="memory", default_step_minutes=0),
    ],
)
def test_validate_rejects_unusable_config(config: UptimeConfig) -> None:
    with pytest.raises(UptimeConfigError):
        config.validate()


def test_build_blob_store_rejects_incomplete_backends() -> None:
    with pytest.raises(UptimeConfigError, match="UPTIME_STORE_DIR"):
        build_blob_store(UptimeConfig(storage="file"))
    with pytest.raises(UptimeConfigError, match="GITHUB_GIST_ID"):
        build_blob_store(UptimeConfig(storage="gist", gist_id="abc123"), session=object())  # type: ignore[arg-type]


def test_build_blob_store_file_backend(tmp_path: Path) -> None:
    store = build_blob_store(UptimeConfig(storage="file", store_dir=tmp_path))
    assert isinstance(store, FileBlobStore)
