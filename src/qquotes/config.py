from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import Any, Dict, Tuple

from .errors import ConfigError

PATH_CONFIG_FILE = "~/.config/qquotes/config.toml"
DEFAULT_PATH_LOG_FILE = "~/qquotes.log"
DEFAULT_PATH_DATA_FILE = "~/qquotes_data.json"


@dataclass(frozen=True)
class AppConfig:
    log_path: str = DEFAULT_PATH_LOG_FILE
    data_path: str = DEFAULT_PATH_DATA_FILE


def _str_key(settings: Dict[str, Any], key: str, default: str) -> str:
    value = settings.get(key)
    return value if isinstance(value, str) and value else default


def load_config(path: str | Path = PATH_CONFIG_FILE) -> Tuple[AppConfig, bool]:
    """
    Read the TOML config file.

    Returns (config, found). A missing file gives the defaults; a missing
    or non-string key falls back to its own default. A file that exists
    but cannot be read or parsed raises ConfigError.
    """
    config_path = Path(path).expanduser()
    if not config_path.exists():
        return AppConfig(), False
    try:
        with config_path.open("rb") as f:
            settings = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Invalid config file {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

    return (
        AppConfig(
            log_path=_str_key(settings, "path_log_file", DEFAULT_PATH_LOG_FILE),
            data_path=_str_key(settings, "path_data_file", DEFAULT_PATH_DATA_FILE),
        ),
        True,
    )
