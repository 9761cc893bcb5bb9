"""Application configuration.

Settings are loaded once by the entry point and passed explicitly to the
composition root; nothing reads configuration from module globals.

Sources, later ones winning:
1. built-in defaults
2. an optional TOML file (``[app]`` and ``[billing]`` tables)
3. ``JOBCARD_*`` environment variables
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path

DEFAULT_DATA_DIR = Path("data")
DEFAULT_CONFIG_FILE = Path("jobcard.toml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class BillingSettings:
    discount_rate: Decimal = Decimal("0.05")
    currency: str = "USD"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    database_url: str | None = None
    billing: BillingSettings = field(default_factory=BillingSettings)


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from defaults, an optional TOML file and the environment.

    An explicitly given *path* must exist; the default ``jobcard.toml`` is
    only read when present.
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    if path is not None:
        p = Path(path)
        if not p.exists():
            raise ConfigError(f"Config file not found: {p.resolve()}")
        settings = _apply_file(settings, p)
    elif DEFAULT_CONFIG_FILE.exists():
        settings = _apply_file(settings, DEFAULT_CONFIG_FILE)

    return _apply_env(settings, env)


def _apply_file(settings: Settings, path: Path) -> Settings:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read config TOML {path}: {e}") from e

    app = data.get("app", {})
    billing = data.get("billing", {})
    try:
        return replace(
            settings,
            data_dir=Path(app["data_dir"]) if "data_dir" in app else settings.data_dir,
            log_level=str(app.get("log_level", settings.log_level)).upper(),
            database_url=app.get("database_url", settings.database_url),
            billing=BillingSettings(
                discount_rate=_parse_rate(
                    billing.get("discount_rate", settings.billing.discount_rate)
                ),
                currency=str(billing.get("currency", settings.billing.currency)),
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config values in {path}: {e}") from e


def _apply_env(settings: Settings, env: Mapping[str, str]) -> Settings:
    if env.get("JOBCARD_DATA_DIR"):
        settings = replace(settings, data_dir=Path(env["JOBCARD_DATA_DIR"]))
    if env.get("JOBCARD_LOG_LEVEL"):
        settings = replace(settings, log_level=env["JOBCARD_LOG_LEVEL"].upper())
    if env.get("JOBCARD_DATABASE_URL"):
        settings = replace(settings, database_url=env["JOBCARD_DATABASE_URL"])
    return settings


def _parse_rate(raw: object) -> Decimal:
    try:
        rate = Decimal(str(raw))
    except InvalidOperation as e:
        raise ConfigError(f"Invalid discount_rate: {raw!r}") from e
    if not Decimal("0") <= rate <= Decimal("1"):
        raise ConfigError(f"discount_rate must be between 0 and 1, got {rate}")
    return rate
