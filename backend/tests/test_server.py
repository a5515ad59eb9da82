import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings
from conftest import VendorMock, canned_success
from server import create_app

HI = [{"role": "user", "content": "hi"}]


def fine_tune_vendor(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/v1/files":
        return httpx.Response(
            200,
            json={
                "id": "file-abc",
                "object": "file",
                "bytes": 120,
                "created_at": 0,
                "filename": "training.jsonl",
                "purpose": "fine-tune",
                "status": "processed",
            },
        )
    if request.url.path == "/v1/fine_tuning/jobs":
        return httpx.Response(
            200,
            json={
                "id": "ftjob-1",
                "object": "fine_tuning.job",
                "created_at": 0,
                "model": "gpt-4.1-mini-2025-04-14",
                "status": "validating_files",
                "training_file": "file-abc",
            },
        )
    return canned_success(request)


@pytest.fixture
def vendor():
    return VendorMock(fine_tune_vendor)


def client_for(vendor, **settings):
    return TestClient(create_app(Settings(**settings), transport=vendor.transport))


def test_health_reports_server_key(vendor):
    assert client_for(vendor).get("/api/health").json() == {"ok": True, "hasServerKey": False}
    assert client_for(vendor, openai_api_key="sk").get("/api/health").json()["hasServerKey"] is True


def test_providers_listing(vendor):
    payload = client_for(vendor).get("/api/providers").json()
    by_id = {p["id"]: p for p in payload["providers"]}
    assert by_id["ollama"]["credentialRequired"] is False
    assert by_id["custom"]["endpointPolicy"] == "required"
    assert by_id["anthropic"]["protocol"] == "anthropic"


def test_chat_success(vendor):
    resp = client_for(vendor).post("/api/chat", json={"messages": HI, "provider": "ollama"})
    assert resp.status_code == 200
    assert resp.json() == {
        "text": "hello",
        "usage": {"prompt_eval_count": 3, "eval_count": 1},
        "model": "llama3.2",
    }


def test_chat_invalid_json(vendor):
    resp = client_for(vendor).post("/api/chat", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid JSON payload."}


def test_chat_missing_messages(vendor):
    resp = client_for(vendor).post("/api/chat", json={"provider": "openai"})
    assert resp.status_code == 400
    assert "Messages" in resp.json()["error"]


def test_chat_vendor_status_propagates():
    mock = VendorMock(lambda request: httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}}))
    resp = client_for(mock).post("/api/chat", json={"messages": HI, "apiKey": "bad"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Incorrect API key provided"}


def test_upload_training_file(vendor):
    jsonl = (
        '{"messages": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]}\n'
        "\n"
        '{"messages": [{"role": "user", "content": "bye"}, {"role": "assistant", "content": "ciao"}]}\n'
    )
    resp = client_for(vendor).post("/api/fine-tune/upload", json={"jsonl": jsonl, "apiKey": "sk"})
    assert resp.status_code == 200
    assert resp.json() == {"fileId": "file-abc"}
    request = vendor.calls[0]
    assert request.headers["authorization"] == "Bearer sk"
    assert b"fine-tune" in request.content
    assert b'"content": "ciao"' in request.content


def test_upload_uses_server_key_and_rejects_without_any(vendor):
    jsonl = '{"messages": []}'
    assert client_for(vendor, openai_api_key="srv").post("/api/fine-tune/upload", json={"jsonl": jsonl}).status_code == 200
    resp = client_for(vendor).post("/api/fine-tune/upload", json={"jsonl": jsonl})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing OpenAI API key."}
    assert len(vendor.calls) == 1


@pytest.mark.parametrize(
    "body,error",
    [
        ({"jsonl": "   "}, "JSONL content is required."),
        ({}, "JSONL content is required."),
        ({"jsonl": '{"messages": []}\n{broken'}, "Line 2 is not valid JSON."),
        ({"jsonl": '["not", "an", "object"]'}, "Line 1 must be an object with a messages array."),
    ],
)
def test_upload_validation(vendor, body, error):
    resp = client_for(vendor, openai_api_key="srv").post("/api/fine-tune/upload", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": error}
    assert vendor.calls == []


def test_create_job(vendor):
    resp = client_for(vendor).post(
        "/api/fine-tune/create",
        json={"trainingFileId": " file-abc ", "model": "gpt-4.1-mini-2025-04-14", "apiKey": "sk"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"jobId": "ftjob-1", "status": "validating_files"}
    sent = vendor.last_json
    assert sent["training_file"] == "file-abc"
    assert sent["method"] == {"type": "supervised"}


@pytest.mark.parametrize(
    "body,error",
    [
        ({"model": "gpt-4.1-mini"}, "trainingFileId is required."),
        ({"trainingFileId": "file-abc", "model": " "}, "model is required."),
    ],
)
def test_create_job_validation(vendor, body, error):
    resp = client_for(vendor, openai_api_key="srv").post("/api/fine-tune/create", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": error}


def test_create_job_vendor_error():
    mock = VendorMock(lambda request: httpx.Response(400, json={"error": {"message": "Model not available for fine-tuning"}}))
    resp = client_for(mock, openai_api_key="srv").post(
        "/api/fine-tune/create", json={"trainingFileId": "file-abc", "model": "gpt-2"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Model not available for fine-tuning"}
