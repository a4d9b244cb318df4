from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Environment variable names for secrets
ENV_BOT_TOKEN = "TGAUDIO_BOT_TOKEN"
ENV_API_BASE = "TGAUDIO_API_BASE"

DEFAULT_API_BASE = "https://api.telegram.org"
DEFAULT_TIMEOUT_S = 30.0

LOCAL_CONFIG_NAME = Path(".tgaudio") / "tgaudio.toml"
HOME_CONFIG_PATH = Path.home() / ".tgaudio" / "tgaudio.toml"


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class TelegramDriverConfig:
    bot_token: str = ""
    api_base: str = DEFAULT_API_BASE
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_mapping(
        cls, config: Mapping[str, Any], config_path: Path | None = None
    ) -> TelegramDriverConfig:
        where = str(config_path) if config_path is not None else "config"
        token = get_bot_token(config, where)
        api_base = get_api_base(config, where)
        timeout_s = config.get("timeout_s", DEFAULT_TIMEOUT_S)
        if isinstance(timeout_s, bool) or not isinstance(timeout_s, (int, float)):
            raise ConfigError(f"Invalid `timeout_s` in {where}; expected a number.")
        if timeout_s <= 0:
            raise ConfigError(f"Invalid `timeout_s` in {where}; must be positive.")
        return cls(bot_token=token, api_base=api_base, timeout_s=float(timeout_s))


def _config_candidates() -> list[Path]:
    candidates = [Path.cwd() / LOCAL_CONFIG_NAME, HOME_CONFIG_PATH]
    if candidates[0] == candidates[1]:
        return [candidates[0]]
    return candidates


def _read_config(cfg_path: Path) -> dict:
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Missing config file {cfg_path}.") from None
    except OSError as e:
        raise ConfigError(f"Failed to read config file {cfg_path}: {e}") from e
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed TOML in {cfg_path}: {e}") from None


def load_config(path: str | Path | None = None) -> tuple[dict, Path | None]:
    """Load the driver config file.

    An explicit path must exist. Without one, the local and home candidates
    are tried in order and an empty config is returned when neither exists,
    so environment variables alone are enough to run.
    """
    if path:
        cfg_path = Path(path).expanduser()
        return _read_config(cfg_path), cfg_path

    for candidate in _config_candidates():
        if candidate.is_file():
            return _read_config(candidate), candidate
    return {}, None


def get_bot_token(config: Mapping[str, Any], where: str = "config") -> str:
    """Get bot token from environment variable or config file.

    Environment variable TGAUDIO_BOT_TOKEN takes precedence over config file.
    An absent token is allowed; the driver then reports itself unconfigured.
    """
    env_token = os.environ.get(ENV_BOT_TOKEN)
    if env_token and env_token.strip():
        return env_token.strip()

    token = config.get("bot_token", "")
    if not isinstance(token, str):
        raise ConfigError(f"Invalid `bot_token` in {where}; expected a string.")
    return token.strip()


def get_api_base(config: Mapping[str, Any], where: str = "config") -> str:
    env_base = os.environ.get(ENV_API_BASE)
    if env_base and env_base.strip():
        return env_base.strip().rstrip("/")

    api_base = config.get("api_base", DEFAULT_API_BASE)
    if not isinstance(api_base, str) or not api_base.strip():
        raise ConfigError(
            f"Invalid `api_base` in {where}; expected a non-empty string."
        )
    return api_base.strip().rstrip("/")


def load_driver_config(path: str | Path | None = None) -> TelegramDriverConfig:
    config, config_path = load_config(path)
    return TelegramDriverConfig.from_mapping(config, config_path)
