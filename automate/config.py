"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
import uuid
from dataclasses import dataclass, field
from typing import Dict

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default
    if value <= 0:
        _stderr_print(f"Non-positive {name}={raw!r}, falling back to {default}")
        return default
    return value


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


GENERATION_DEFAULTS = {
    "temperature": 0.1,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}

CONFIG = {
    "port": int(_env_float("PORT", 3000)),
    "session_id": str(uuid.uuid4()),
    # Store backend the generated plans are executed against
    "store_api_base_url": os.getenv("STORE_API_BASE_URL", "http://localhost:8000/api").rstrip("/"),
    "backend_timeout_seconds": _env_float("BACKEND_TIMEOUT_SECONDS", 30.0),
    # Gemini (generateContent REST API)
    "gemini_api_key": os.getenv("GEMINI_API_KEY", ""),
    "gemini_model": os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
    "gemini_api_base": os.getenv(
        "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
    ).rstrip("/"),
    "llm_timeout_seconds": _env_float("LLM_TIMEOUT_SECONDS", 60.0),
    # Ask the model for a bare JSON document instead of prose around it
    "structured_output": _env_flag("GEMINI_STRUCTURED_OUTPUT", "true"),
    "generation": dict(GENERATION_DEFAULTS),
    # Language-model call limits
    "usage_limits": {
        "max_calls_per_minute": 30,
        "max_calls_per_hour": 500,
        "max_calls_per_day": 5000,
        "warning_threshold_pct": 80,
        "paused": False,
    },
}


# ── Typed config ──────────────────────────────────────


@dataclass
class UsageLimitsConfig:
    max_calls_per_minute: int = 30
    max_calls_per_hour: int = 500
    max_calls_per_day: int = 5000
    warning_threshold_pct: int = 80
    paused: bool = False


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 60.0
    structured_output: bool = True
    generation: Dict[str, float] = field(default_factory=lambda: dict(GENERATION_DEFAULTS))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass
class BackendConfig:
    base_url: str = "http://localhost:8000/api"
    timeout_seconds: float = 30.0


@dataclass
class AppConfig:
    """Typed view over CONFIG."""

    port: int = 3000
    session_id: str = ""
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    usage_limits: UsageLimitsConfig = field(default_factory=UsageLimitsConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=CONFIG["port"],
            session_id=CONFIG["session_id"],
            gemini=GeminiConfig(
                api_key=CONFIG["gemini_api_key"],
                model=CONFIG["gemini_model"],
                api_base=CONFIG["gemini_api_base"],
                timeout_seconds=CONFIG["llm_timeout_seconds"],
                structured_output=CONFIG["structured_output"],
                generation=dict(CONFIG["generation"]),
            ),
            backend=BackendConfig(
                base_url=CONFIG["store_api_base_url"],
                timeout_seconds=CONFIG["backend_timeout_seconds"],
            ),
            usage_limits=UsageLimitsConfig(**CONFIG["usage_limits"]),
        )
