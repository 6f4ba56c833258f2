"""
Settings resolution for the ``bk`` command.

Precedence: command line > environment > YAML config file > defaults.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from benchkeeper.errors import ConfigError
from benchkeeper.scenarios import DEFAULT_SCENARIO_NAMESPACE

ENV_PREFIX = "BENCHKEEPER_"
DEFAULT_CONFIG_PATH = Path("~/.config/benchkeeper.yaml")


@dataclass
class Settings:
    result_dir: Optional[str] = None
    num_keep: int = 0
    scenario_namespace: str = DEFAULT_SCENARIO_NAMESPACE


def _config_path(config_path, env) -> Path:
    if config_path:
        return Path(config_path).expanduser()
    if env.get(ENV_PREFIX + "CONFIG"):
        return Path(env[ENV_PREFIX + "CONFIG"]).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _read_config_file(path: Path, required: bool) -> Dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Can't read config file '{path}': {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping")
    return data


def _coerce(name: str, value: Any) -> Any:
    if name == "num_keep":
        try:
            value = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"num_keep must be an integer, got {value!r}") from exc
        if value < 0:
            raise ConfigError(f"num_keep must be >= 0, got {value}")
        return value
    return str(value)


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    config_path: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    env = os.environ if env is None else env
    path = _config_path(config_path, env)
    file_values = _read_config_file(path, required=bool(config_path))

    known = [f.name for f in fields(Settings)]
    unknown = sorted(set(file_values) - set(known))
    if unknown:
        raise ConfigError(f"Unknown setting(s) in '{path}': {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for name in known:
        if overrides and overrides.get(name) is not None:
            values[name] = _coerce(name, overrides[name])
        elif env.get(ENV_PREFIX + name.upper()):
            values[name] = _coerce(name, env[ENV_PREFIX + name.upper()])
        elif file_values.get(name) is not None:
            values[name] = _coerce(name, file_values[name])
    return Settings(**values)


def require_result_dir(settings: Settings) -> str:
    if not settings.result_dir:
        raise ConfigError(
            f"result_dir is not set: use --result-dir, {ENV_PREFIX}RESULT_DIR or the config file"
        )
    return settings.result_dir
