"""
Runtime settings, read once from the environment (after .env is loaded by the server).
Adapters never read the environment themselves; they get these values injected.
"""
import os
from dataclasses import dataclass, field


def _float_env(name: str, default: float) -> float:
    try:
        value = float(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


def _int_env(name: str, default: int) -> int:
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    # Fallback key for the "openai" provider only (BYOK requests override it).
    openai_api_key: str | None = field(default=None, repr=False)
    # Replaces the loopback default for the local Ollama family.
    ollama_base_url: str | None = None
    request_timeout: float = 60.0
    local_request_timeout: float = 300.0
    # Anthropic requires an explicit output ceiling.
    max_output_tokens: int = 2048
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
        return cls(
            openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
            ollama_base_url=(os.getenv("OLLAMA_BASE_URL") or "").strip() or None,
            request_timeout=_float_env("CHAT_TIMEOUT_SEC", 60.0),
            local_request_timeout=_float_env("OLLAMA_TIMEOUT_SEC", 300.0),
            max_output_tokens=_int_env("DEFAULT_MAX_TOKENS", 2048),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",),
            log_level=os.getenv("LOG_LEVEL", "info").upper(),
        )

    @property
    def has_server_key(self) -> bool:
        return bool(self.openai_api_key)
