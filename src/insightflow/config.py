from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from the environment."""

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    llm_model: str = "gpt-4o-mini"
    llm_report_model: str = "gpt-4o"
    max_rows_for_ai: int = 50
    max_rows_for_preview: int = 5
    max_chart_rows: int = 100
    log_level: str = "INFO"

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        v = int(raw)
        return v if v > 0 else default
    except ValueError:
        return default


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def load_settings(*, openai_api_key: Optional[str] = None) -> Settings:
    """
    Build Settings from environment variables.

    An explicit key (e.g. from st.secrets) wins over OPENAI_API_KEY, which
    wins over the Replit-provided AI_INTEGRATIONS_OPENAI_API_KEY.
    """
    key = openai_api_key or _env_str("OPENAI_API_KEY") or _env_str("AI_INTEGRATIONS_OPENAI_API_KEY")
    base_url = _env_str("OPENAI_BASE_URL") or _env_str("AI_INTEGRATIONS_OPENAI_BASE_URL")
    return Settings(
        openai_api_key=key,
        openai_base_url=base_url,
        llm_model=_env_str("INSIGHTFLOW_LLM_MODEL", "gpt-4o-mini"),
        llm_report_model=_env_str("INSIGHTFLOW_LLM_REPORT_MODEL", "gpt-4o"),
        max_rows_for_ai=_env_int("INSIGHTFLOW_MAX_ROWS_FOR_AI", 50),
        max_rows_for_preview=_env_int("INSIGHTFLOW_MAX_ROWS_FOR_PREVIEW", 5),
        max_chart_rows=_env_int("INSIGHTFLOW_MAX_CHART_ROWS", 100),
        log_level=(_env_str("INSIGHTFLOW_LOG_LEVEL", "INFO") or "INFO").upper(),
    )
