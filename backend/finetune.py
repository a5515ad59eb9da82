"""
Thin wrappers around OpenAI's training-file upload and fine-tune job creation.
No dispatch here: these always talk to OpenAI.
"""
import json
import logging
import uuid
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from config import Settings
from normalizer import parse_json_body
from providers import ChatError, InvalidPayload, MissingCredential, TransportFailure, VendorRejected
from providers.base import sdk_error_message

logger = logging.getLogger(__name__)


def validate_jsonl(jsonl: str) -> int:
    """Check every non-blank line is a chat training example; returns the example count."""
    count = 0
    for lineno, line in enumerate(jsonl.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            example = json.loads(line)
        except json.JSONDecodeError:
            raise InvalidPayload(f"Line {lineno} is not valid JSON.")
        if not isinstance(example, dict) or not isinstance(example.get("messages"), list):
            raise InvalidPayload(f"Line {lineno} must be an object with a messages array.")
        count += 1
    return count


def _text(data: dict, key: str) -> str | None:
    value = data.get(key)
    return (value.strip() or None) if isinstance(value, str) else None


class FineTuneService:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def _api_key(self, data: dict) -> str:
        key = _text(data, "apiKey") or self.settings.openai_api_key
        if not key:
            raise MissingCredential("Missing OpenAI API key.")
        return key

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.request_timeout, transport=self.transport)

    def _client(self, api_key: str, http_client: httpx.AsyncClient) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key, max_retries=0, timeout=self.settings.request_timeout, http_client=http_client)

    async def upload(self, raw: Any) -> dict | ChatError:
        """Upload JSONL training data; returns ``{"fileId": ...}``."""
        try:
            data = parse_json_body(raw)
            jsonl = data.get("jsonl")
            if not isinstance(jsonl, str) or not jsonl.strip():
                raise InvalidPayload("JSONL content is required.")
            examples = validate_jsonl(jsonl)
            filename = _text(data, "filename") or f"training-{uuid.uuid4()}.jsonl"
            api_key = self._api_key(data)
            async with self._http_client() as http_client:
                f = await self._client(api_key, http_client).files.create(
                    file=(filename, jsonl.encode("utf-8"), "application/jsonl"),
                    purpose="fine-tune",
                )
            logger.info("uploaded training file %s (%d examples)", f.id, examples)
            return {"fileId": f.id}
        except ChatError as e:
            return e
        except openai.APIStatusError as e:
            return VendorRejected(e.status_code, sdk_error_message(e, "Failed to upload file."))
        except Exception:
            logger.exception("training file upload failed")
            return TransportFailure("Failed to upload file.")

    async def create_job(self, raw: Any) -> dict | ChatError:
        """Start a supervised fine-tune job; returns ``{"jobId": ..., "status": ...}``."""
        try:
            data = parse_json_body(raw)
            training_file = _text(data, "trainingFileId")
            if not training_file:
                raise InvalidPayload("trainingFileId is required.")
            model = _text(data, "model")
            if not model:
                raise InvalidPayload("model is required.")
            api_key = self._api_key(data)
            async with self._http_client() as http_client:
                job = await self._client(api_key, http_client).fine_tuning.jobs.create(
                    training_file=training_file,
                    model=model,
                    method={"type": "supervised"},
                )
            logger.info("created fine-tune job %s on %s", job.id, model)
            return {"jobId": job.id, "status": job.status}
        except ChatError as e:
            return e
        except openai.APIStatusError as e:
            return VendorRejected(e.status_code, sdk_error_message(e, "Failed to create job."))
        except Exception:
            logger.exception("fine-tune job creation failed")
            return TransportFailure("Failed to create job.")
