"""
Turns a raw chat request body into the canonical ChatRequest, or fails before any I/O.
"""
import json
import math
from typing import Any

from providers import ChatMessage, ChatRequest, InvalidPayload, MissingMessages, UnsupportedProvider
from providers.registry import DEFAULT_PROVIDER, default_model_for

DEFAULT_TEMPERATURE = 0.6
ALLOWED_ROLES = ("user", "assistant", "system", "developer")


def _reject_constant(name: str):
    # NaN and Infinity are not JSON.
    raise InvalidPayload()


def parse_json_body(body: Any) -> dict:
    """Decode bytes/str bodies; the result must be a JSON object."""
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidPayload()
    if isinstance(body, str):
        try:
            body = json.loads(body, parse_constant=_reject_constant)
        except json.JSONDecodeError:
            raise InvalidPayload()
    if not isinstance(body, dict):
        raise InvalidPayload()
    return body


def _optional_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _parse_message(raw: Any) -> ChatMessage:
    if not isinstance(raw, dict):
        raise InvalidPayload("Each message must be an object with role and content.")
    role = raw.get("role", "user")
    content = raw.get("content", "")
    if role not in ALLOWED_ROLES:
        raise InvalidPayload(f"Unsupported message role: {role!r}.")
    if not isinstance(content, str):
        raise InvalidPayload("Message content must be a string.")
    return ChatMessage(role=role, content=content)


def normalize_request(body: Any) -> ChatRequest:
    data = parse_json_body(body)

    raw_messages = data.get("messages")
    if not isinstance(raw_messages, list) or not raw_messages:
        raise MissingMessages()
    messages = [_parse_message(m) for m in raw_messages]

    raw_provider = data.get("provider")
    if raw_provider is not None and not isinstance(raw_provider, str):
        raise UnsupportedProvider(raw_provider)
    provider = (_optional_text(raw_provider) or DEFAULT_PROVIDER).lower()

    temperature = data.get("temperature")
    if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
        temperature = DEFAULT_TEMPERATURE
    else:
        try:
            temperature = float(temperature)
        except OverflowError:
            temperature = math.inf
        if not math.isfinite(temperature):
            raise InvalidPayload("temperature must be a finite number.")

    return ChatRequest(
        messages=messages,
        model=_optional_text(data.get("model")) or default_model_for(provider),
        temperature=temperature,
        provider=provider,
        system_prompt=_optional_text(data.get("systemPrompt")),
        credential=_optional_text(data.get("apiKey")),
        endpoint_override=_optional_text(data.get("baseUrl")),
    )
