"""
Google Cloud Function (2nd gen) HTTP handler for the chat dispatch API.
Deploy with: gcloud functions deploy chat-api --gen2 --runtime python311 --trigger-http ...
Set OPENAI_API_KEY in the function config to enable the server-side fallback key.
"""
import asyncio
import json
import sys
from pathlib import Path

_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

from handlers.shared import get_dispatcher, to_http

_HEADERS = {"Content-Type": "application/json", "Access-Control-Allow-Origin": "*"}


def chat_http(request):
    """HTTP Cloud Function entrypoint. Expects POST with the chat JSON body."""
    if request.method != "POST":
        return (json.dumps({"error": "Method not allowed"}), 405, _HEADERS)
    body = request.get_data() if hasattr(request, "get_data") else (request.data or b"")
    status, payload = to_http(asyncio.run(get_dispatcher().dispatch(body)))
    return (json.dumps(payload), status, _HEADERS)
