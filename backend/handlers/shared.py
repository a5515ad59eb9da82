"""Shared request/response handling for the dev server, Lambda and GCP."""
from config import Settings
from core import Dispatcher
from providers import ChatError

_dispatcher: Dispatcher | None = None


def get_dispatcher() -> Dispatcher:
    """Process-wide dispatcher built from the environment on first use."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = Dispatcher(Settings.from_env())
    return _dispatcher


def to_http(outcome) -> tuple[int, dict]:
    """Map a dispatch/fine-tune outcome to (status, JSON body)."""
    if isinstance(outcome, ChatError):
        return outcome.http_status, outcome.to_dict()
    if hasattr(outcome, "to_dict"):
        return 200, outcome.to_dict()
    return 200, outcome
