# === FILE: font_scout/config.py ===
"""
Loading and validation of the FontScout discovery configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

__all__ = ["DiscoveryConfig", "load_config"]


class DiscoveryConfig(BaseModel):
    """Budgets and timeouts for one page-discovery run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_pages: int = Field(10, ge=1, description="Hard cap on the number of returned pages.")
    timeout: float = Field(30.0, gt=0, description="Navigation timeout for the base page (seconds).")
    sitemap_timeout: float = Field(10.0, gt=0, description="Timeout per sitemap request (seconds).")
    probe_timeout: float = Field(5.0, gt=0, description="Timeout per common-path HEAD probe (seconds).")
    include_subdomains: bool = Field(False, description="Accept links that point to subdomains.")
    user_agent: str = Field(
        "Mozilla/5.0 (compatible; FontScout/1.0)",
        min_length=1,
        description="User-Agent header for every request.",
    )
    sitemap_limit: int = Field(50, ge=0, description="Max same-origin URLs taken from a sitemap.")
    link_soft_cap: int = Field(100, ge=1, description="Stop adding in-page links past this many entries.")
    probe_concurrency: Optional[int] = Field(
        None, ge=1, description="Parallel HEAD probes; None probes every path at once."
    )


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> DiscoveryConfig:
    """
    Read YAML or JSON and return a validated DiscoveryConfig.
    With *path* None the default file is used when present, built-in defaults otherwise.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return DiscoveryConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return DiscoveryConfig(**data)
