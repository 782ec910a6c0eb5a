from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONFIG_PATH = Path("network-auditor.yaml")
SITES_ENV_VAR = "NETWORK_AUDITOR_SITES"


class AuditorConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sites_path: str = "sites.json"
    request_timeout: float = Field(default=15.0, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def _resolve_optional_path(value: str, base_dir: Path) -> str:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return str(path)


def load_config(path: Path | None = None) -> AuditorConfig:
    """Read the YAML config at ``path``; defaults apply when there is none."""
    if path is not None and path.exists():
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        config = AuditorConfig.model_validate(data)
        config.sites_path = _resolve_optional_path(config.sites_path, path.resolve().parent)
    else:
        config = AuditorConfig()

    config.sites_path = os.getenv(SITES_ENV_VAR) or config.sites_path
    return config
