from pathlib import Path

import pytest
from pydantic import ValidationError

from network_auditor.config import SITES_ENV_VAR, load_config


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv(SITES_ENV_VAR, raising=False)
    config = load_config(tmp_path / "missing.yaml")
    assert config.sites_path == "sites.json"
    assert config.request_timeout == 15.0
    assert config.log_level == "WARNING"


def test_sites_path_resolves_against_config_dir(tmp_path, monkeypatch):
    monkeypatch.delenv(SITES_ENV_VAR, raising=False)
    path = tmp_path / "network-auditor.yaml"
    path.write_text("sites_path: data/sites.json\nrequest_timeout: 5\nlog_level: DEBUG\n", encoding="utf-8")
    config = load_config(path)
    assert Path(config.sites_path) == tmp_path.resolve() / "data" / "sites.json"
    assert config.request_timeout == 5.0
    assert config.log_level == "DEBUG"


def test_env_overrides_sites_path(tmp_path, monkeypatch):
    monkeypatch.setenv(SITES_ENV_VAR, "/srv/network/sites.json")
    assert load_config(None).sites_path == "/srv/network/sites.json"


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "network-auditor.yaml"
    path.write_text("site_path: typo.json\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)
