"""
AWS Lambda handler for the chat dispatch API.
Configure the Lambda to use Python 3.10+, set handler to handlers.aws_lambda.handler,
and set OPENAI_API_KEY if requests without their own key should fall back to a server key.
"""
import asyncio
import base64
import json
import sys
from pathlib import Path

# Ensure backend root is on path when running from Lambda (working dir is often the deployment package root)
_backend_root = Path(__file__).resolve().parent.parent
if str(_backend_root) not in sys.path:
    sys.path.insert(0, str(_backend_root))

from handlers.shared import get_dispatcher, to_http

_HEADERS = {"Content-Type": "application/json", "Access-Control-Allow-Origin": "*"}


def _event_body(event: dict):
    body = event.get("body")
    if body is None:
        return "{}" if "requestContext" in event else event
    if event.get("isBase64Encoded") and isinstance(body, str):
        return base64.b64decode(body)
    return body


def handler(event, context):
    outcome = asyncio.run(get_dispatcher().dispatch(_event_body(event)))
    status, payload = to_http(outcome)
    return {"statusCode": status, "headers": _HEADERS, "body": json.dumps(payload)}
