from __future__ import annotations

from pathlib import Path

import pytest
import yaml


HOST_CONFIG = {
    "persist_root": "/persist",
    "directories": ["/var/log", "/var/lib/nixos", "/home/alice/.ssh"],
    "rollback": {"datasets": ["rpool/local/root", "rpool/safe/home"]},
    "setup_directories": [
        {"path": "/home/alice", "owner": "alice", "group": "users", "mode": "0700"},
    ],
}


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "PERSISTMOUNT_LOG_LEVEL",
        "PERSISTMOUNT_LOG_FORMAT",
        "PERSISTMOUNT_PERSIST_ROOT",
        "PERSISTMOUNT_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the settings under test.
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def host_config_data() -> dict:
    return yaml.safe_load(yaml.safe_dump(HOST_CONFIG))


@pytest.fixture
def host_config_path(tmp_path: Path, host_config_data: dict) -> Path:
    path = tmp_path / "host.yaml"
    path.write_text(yaml.safe_dump(host_config_data), encoding="utf-8")
    return path
