"""Configuration for fragment checking and merging.

Settings come from a YAML file. The file is located by, in order:
    - an explicit path
    - RELNOTE_CONFIG — path to a config file
    - relnote.yaml in the current directory
Missing files fall back to defaults.

Recognized keys:
    suffix: ".md"                  # fragment file suffix
    package_url_prefix: "/pkg/"    # link target prefix for package headings
    package_heading_level: 4
    heading_ids: true              # parse {#id} heading suffixes
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from relnote_engine.document.parser import ParserOptions

CONFIG_ENV_VAR = "RELNOTE_CONFIG"
DEFAULT_CONFIG_NAME = "relnote.yaml"


@dataclass
class RelnoteConfig:
    suffix: str = ".md"
    package_url_prefix: str = "/pkg/"
    package_heading_level: int = 4
    heading_ids: bool = True

    def parser_options(self) -> ParserOptions:
        return ParserOptions(heading_ids=self.heading_ids)


def config_path() -> Path | None:
    """Return the config file to use, or None if there isn't one."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    local = Path.cwd() / DEFAULT_CONFIG_NAME
    return local if local.is_file() else None


def load_config(path: Path | str | None = None) -> RelnoteConfig:
    """Load configuration from YAML.

    Raises:
        FileNotFoundError: If an explicitly given file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the file is not a YAML mapping or a value has the wrong type.
    """
    cfg_path = Path(path) if path else config_path()
    if cfg_path is None:
        return RelnoteConfig()

    with open(cfg_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return RelnoteConfig()
    if not isinstance(data, dict):
        raise ValueError(f"config at {cfg_path} is not a YAML mapping")

    known = {f.name: f for f in fields(RelnoteConfig)}
    values = {}
    for key, value in data.items():
        if key not in known:
            warnings.warn(f"{cfg_path}: ignoring unknown config key '{key}'")
            continue
        expected = type(getattr(RelnoteConfig(), key))
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(
                f"{cfg_path}: '{key}' must be {expected.__name__}, got {type(value).__name__}"
            )
        values[key] = value

    cfg = RelnoteConfig(**values)
    if not 1 <= cfg.package_heading_level <= 6:
        raise ValueError(f"{cfg_path}: package_heading_level must be between 1 and 6")
    return cfg
