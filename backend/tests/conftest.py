import dataclasses
import json

import httpx
import pytest

from config import Settings
from core import Dispatcher


def openai_completion(text="hello", model="gpt-4.1-mini"):
    message = {"role": "assistant"}
    if text is not None:
        message["content"] = text
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": model,
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
    }


def anthropic_message(text="hello", model="claude-sonnet-4-20250514"):
    content = [{"type": "text", "text": text}] if text is not None else []
    return {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "model": model,
        "content": content,
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 3, "output_tokens": 1},
    }


def gemini_response(text="hello"):
    parts = [{"text": text}] if text is not None else []
    return {
        "candidates": [{"content": {"role": "model", "parts": parts}, "finishReason": "STOP"}],
        "usageMetadata": {"promptTokenCount": 3, "candidatesTokenCount": 1, "totalTokenCount": 4},
        "modelVersion": "gemini-2.5-flash-001",
    }


def cohere_response(text="hello"):
    content = [{"type": "text", "text": text}] if text is not None else []
    return {
        "id": "c-1",
        "message": {"role": "assistant", "content": content},
        "finish_reason": "COMPLETE",
        "usage": {"billed_units": {"input_tokens": 3, "output_tokens": 1}},
    }


def ollama_response(text="hello", model="llama3.2"):
    message = {"role": "assistant"}
    if text is not None:
        message["content"] = text
    return {"model": model, "message": message, "done": True, "prompt_eval_count": 3, "eval_count": 1}


def canned_success(request: httpx.Request) -> httpx.Response:
    """Answer like whichever vendor the URL points at."""
    path = request.url.path
    if path.endswith("/chat/completions"):
        return httpx.Response(200, json=openai_completion())
    if path.endswith("/v1/messages"):
        return httpx.Response(200, json=anthropic_message())
    if path.endswith(":generateContent"):
        return httpx.Response(200, json=gemini_response())
    if path.endswith("/v2/chat"):
        return httpx.Response(200, json=cohere_response())
    if path.endswith("/api/chat"):
        return httpx.Response(200, json=ollama_response())
    return httpx.Response(404, json={"error": {"message": f"no route for {path}"}})


class VendorMock:
    """Records every outbound request and answers with ``handler``."""

    def __init__(self, handler=canned_success):
        self.handler = handler
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_json(self) -> dict:
        return json.loads(self.calls[-1].content)


@pytest.fixture
def vendor():
    return VendorMock()


@pytest.fixture
def settings():
    return Settings(openai_api_key=None)


@pytest.fixture
def make_dispatcher(settings):
    def _make(mock: VendorMock, **overrides):
        return Dispatcher(dataclasses.replace(settings, **overrides), transport=mock.transport)

    return _make
