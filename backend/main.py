"""
GCP Cloud Functions entrypoint. Exposes chat_http for 2nd gen HTTP functions.
Set entry-point to main.chat_http when deploying.
"""
from handlers.gcp_function import chat_http

__all__ = ["chat_http"]
