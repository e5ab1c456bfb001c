from __future__ import annotations

import json
import os
from dataclasses import dataclass

from .errors import ConfigError


def _get_env(name: str, default: str | None = None, required: bool = False) -> str:
    value = os.getenv(name, default)
    if required and not value:
        raise ConfigError(f"Missing required env var: {name}")
    return value or ""


def _parse_env_list(value: str) -> list[str]:
    raw = (value or "").strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
            if isinstance(parsed, list):
                return [str(x).strip() for x in parsed if str(x).strip()]
        except ValueError:
            pass
    if "|" in raw:
        return [x.strip() for x in raw.split("|") if x.strip()]
    return [x.strip() for x in raw.split(",") if x.strip()]


def _parse_bool(value: str) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _parse_tab_range(value: str) -> tuple[int | None, int | None]:
    # "start:end" slice over the spreadsheet's tab order, either side optional.
    raw = (value or "").strip()
    if not raw:
        return None, None
    if ":" not in raw:
        raise ConfigError(f"SUMMARY_TAB_RANGE must look like 'start:end', got {raw!r}")
    start_raw, end_raw = raw.split(":", 1)
    try:
        start = int(start_raw) if start_raw.strip() else None
        end = int(end_raw) if end_raw.strip() else None
    except ValueError as exc:
        raise ConfigError(f"SUMMARY_TAB_RANGE must hold integers, got {raw!r}") from exc
    return start, end


DEFAULT_CREDENTIALS_FILE = "/app/credentials/service_account.json"
DEFAULT_HEADER_INDICATORS = ["Hours", "Cost"]
DEFAULT_IGNORE_SHEETS = ["Config", "Logs", "README"]
DEFAULT_TITLE_TEMPLATE = "{month} Summary"


@dataclass(frozen=True)
class Settings:
    spreadsheet_id: str
    credentials_file: str = DEFAULT_CREDENTIALS_FILE
    header_indicators: tuple[str, ...] = tuple(DEFAULT_HEADER_INDICATORS)
    tab_range: tuple[int | None, int | None] = (None, None)
    ignore_sheets: tuple[str, ...] = tuple(DEFAULT_IGNORE_SHEETS)
    title_template: str = DEFAULT_TITLE_TEMPLATE
    enable_grid_styling: bool = False
    num_retries: int = 3
    timezone: str = "UTC"
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build :class:`Settings` from the process environment.

    Raises :class:`ConfigError` when ``SPREADSHEET_ID`` is missing or a value
    cannot be parsed.
    """
    indicators = _parse_env_list(_get_env("HEADER_INDICATORS", ",".join(DEFAULT_HEADER_INDICATORS)))
    if not indicators:
        raise ConfigError("HEADER_INDICATORS must name at least one indicator")
    try:
        num_retries = int(_get_env("SHEETS_NUM_RETRIES", "3"))
    except ValueError as exc:
        raise ConfigError("SHEETS_NUM_RETRIES must be an integer") from exc
    return Settings(
        spreadsheet_id=_get_env("SPREADSHEET_ID", required=True),
        credentials_file=_get_env("GOOGLE_SERVICE_ACCOUNT_FILE", DEFAULT_CREDENTIALS_FILE),
        header_indicators=tuple(indicators),
        tab_range=_parse_tab_range(_get_env("SUMMARY_TAB_RANGE", "")),
        ignore_sheets=tuple(_parse_env_list(_get_env("IGNORE_SHEETS", ",".join(DEFAULT_IGNORE_SHEETS)))),
        title_template=_get_env("SUMMARY_TITLE_TEMPLATE", DEFAULT_TITLE_TEMPLATE),
        enable_grid_styling=_parse_bool(_get_env("SUMMARY_ENABLE_GRID_STYLING", "false")),
        num_retries=num_retries,
        timezone=_get_env("TZ", "UTC"),
        log_level=_get_env("LOG_LEVEL", "INFO").upper(),
    )
