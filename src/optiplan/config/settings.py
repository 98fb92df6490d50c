from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from platformdirs import user_data_dir, user_log_dir

load_dotenv()

APP_NAME = "OptiPlan"
APP_AUTHOR = "OptiPlan"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
LOG_DIR = Path(user_log_dir(APP_NAME, APP_AUTHOR))

GOOGLE_CALENDAR_SCOPES = ("https://www.googleapis.com/auth/calendar.events.readonly",)


@dataclass(frozen=True)
class LlmSettings:
    api_key: Optional[str]
    model: str
    base_url: Optional[str]
    organization: Optional[str]
    project: Optional[str]
    temperature: float

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.model)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.api_key:
            missing.append("OPENAI_API_KEY")
        if not self.model:
            missing.append("OPENAI_MODEL")
        return missing


@dataclass(frozen=True)
class ProviderSettings:
    client_id: str
    client_secret: str
    api_key: str
    token_path: Path
    simulated_latency: float


@dataclass(frozen=True)
class ApiSettings:
    base_url: str
    timeout: float


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    locale: str


@dataclass(frozen=True)
class AppSettings:
    llm: LlmSettings
    provider: ProviderSettings
    api: ApiSettings
    ui: UiSettings


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    llm = LlmSettings(
        api_key=os.getenv("OPENAI_API_KEY"),
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        base_url=os.getenv("OPENAI_BASE_URL"),
        organization=os.getenv("OPENAI_ORG"),
        project=os.getenv("OPENAI_PROJECT"),
        temperature=_float_from_env("OPTIPLAN_TEMPERATURE", 0.7),
    )

    provider = ProviderSettings(
        client_id=os.getenv("GOOGLE_CLIENT_ID", ""),
        client_secret=os.getenv("GOOGLE_CLIENT_SECRET", ""),
        api_key=os.getenv("GOOGLE_API_KEY", ""),
        token_path=Path(os.getenv("GOOGLE_TOKEN_PATH", str(DATA_DIR / "google_token.json"))),
        simulated_latency=_float_from_env("OPTIPLAN_SYNC_LATENCY", 1.5),
    )

    api = ApiSettings(
        base_url=os.getenv("OPTIPLAN_API_URL", "http://127.0.0.1:8000").rstrip("/"),
        timeout=_float_from_env("OPTIPLAN_HTTP_TIMEOUT", 30.0),
    )

    ui = UiSettings(
        app_name=os.getenv("OPTIPLAN_APP_NAME", APP_NAME),
        locale=os.getenv("OPTIPLAN_LOCALE", "ja-JP"),
    )

    return AppSettings(llm=llm, provider=provider, api=api, ui=ui)
