"""
Explicit shapes for the vendors we talk to over raw JSON (Gemini, Cohere, Ollama).

Every field a vendor may leave out has a defined default, so "the vendor sent
no text" parses to an empty value, while a body that is not the expected
object at all fails validation and surfaces as a transport fault.
"""
import json
from typing import Any, Optional, Type

import httpx
from pydantic import BaseModel, ValidationError


# ---- Gemini generateContent ----

class GeminiPart(BaseModel):
    text: Optional[str] = None


class GeminiContent(BaseModel):
    role: Optional[str] = None
    parts: list[GeminiPart] = []


class GeminiCandidate(BaseModel):
    content: Optional[GeminiContent] = None
    finishReason: Optional[str] = None


class GeminiResponse(BaseModel):
    candidates: list[GeminiCandidate] = []
    usageMetadata: Optional[dict[str, Any]] = None
    modelVersion: Optional[str] = None

    def text(self) -> str:
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(p.text or "" for p in self.candidates[0].content.parts)


class GeminiErrorDetail(BaseModel):
    code: Optional[int] = None
    message: Optional[str] = None
    status: Optional[str] = None


class GeminiError(BaseModel):
    error: Optional[GeminiErrorDetail] = None

    def detail(self) -> str | None:
        return self.error.message if self.error else None


# ---- Cohere chat (v2) ----

class CohereContentBlock(BaseModel):
    type: str = "text"
    text: Optional[str] = None


class CohereMessage(BaseModel):
    role: Optional[str] = None
    content: list[CohereContentBlock] = []


class CohereResponse(BaseModel):
    id: Optional[str] = None
    message: Optional[CohereMessage] = None
    finish_reason: Optional[str] = None
    usage: Optional[dict[str, Any]] = None

    def text(self) -> str:
        if self.message is None:
            return ""
        return "".join(b.text or "" for b in self.message.content if b.type == "text")


class CohereError(BaseModel):
    message: Optional[str] = None

    def detail(self) -> str | None:
        return self.message


# ---- Ollama /api/chat ----

class OllamaMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class OllamaResponse(BaseModel):
    model: Optional[str] = None
    message: Optional[OllamaMessage] = None
    done: Optional[bool] = None
    prompt_eval_count: Optional[int] = None
    eval_count: Optional[int] = None

    def text(self) -> str:
        if self.message is None:
            return ""
        return self.message.content or ""

    def usage(self) -> dict | None:
        if self.prompt_eval_count is None and self.eval_count is None:
            return None
        return {"prompt_eval_count": self.prompt_eval_count, "eval_count": self.eval_count}


class OllamaError(BaseModel):
    error: Optional[str] = None

    def detail(self) -> str | None:
        return self.error


def error_message(response: httpx.Response, envelope: Type[BaseModel], fallback: str) -> str:
    """Best-effort message from a vendor error body; never raises."""
    try:
        parsed = envelope.model_validate(response.json())
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
        return fallback
    message = parsed.detail()
    if isinstance(message, str) and message.strip():
        return message.strip()
    return fallback
