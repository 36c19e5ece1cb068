"""
Runtime settings read from the environment (and a local .env, when present).

Read once at startup and handed to create_app(); nothing else in the
codebase calls os.getenv for these values.
"""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_TRUTHY = ("1", "true", "yes")


def _default_python() -> str:
    return "python" if os.name == "nt" else "python3"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_timeout(name: str) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    value = float(raw)
    if value <= 0:
        raise ValueError(f"{name} must be a positive number of seconds, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    python_path: str = field(default_factory=_default_python)
    script_dir: str = os.path.join(ROOT, "python", "src")
    timeout_seconds: Optional[float] = None   # None: subprocess may run unbounded
    mock_analysis: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    rate_limit_enabled: bool = True
    rate_limit_default: str = "100/15minutes"
    cors_origins: tuple[str, ...] = ("*",)
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            python_path=os.getenv("PYTHON_PATH") or _default_python(),
            script_dir=os.getenv("ANALYSIS_SCRIPT_DIR") or os.path.join(ROOT, "python", "src"),
            timeout_seconds=_env_timeout("ANALYSIS_TIMEOUT_SECONDS"),
            mock_analysis=_env_flag("MOCK_ANALYSIS"),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            log_json=_env_flag("LOG_JSON"),
            rate_limit_enabled=_env_flag("RATE_LIMIT_ENABLED", default=True),
            rate_limit_default=os.getenv("RATE_LIMIT_DEFAULT", "100/15minutes"),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8000")),
        )
