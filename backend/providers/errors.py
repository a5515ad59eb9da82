"""Canonical chat errors. Every failure a caller can see is one of these."""


class ChatError(Exception):
    default_message = "Chat request failed."
    default_status = 500

    def __init__(self, message: str | None = None, http_status: int | None = None):
        self.message = message or self.default_message
        self.http_status = http_status or self.default_status
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidPayload(ChatError):
    default_message = "Invalid JSON payload."
    default_status = 400


class MissingMessages(ChatError):
    default_message = "Messages array is required."
    default_status = 400


class MissingCredential(ChatError):
    default_message = "Missing API key."
    default_status = 400


class MissingEndpoint(ChatError):
    default_message = "Base URL is required."
    default_status = 400


class UnsupportedProvider(ChatError):
    default_status = 400

    def __init__(self, provider_id: str):
        super().__init__(f"Unsupported provider: {provider_id!r}.")
        self.provider_id = provider_id


class VendorRejected(ChatError):
    """The vendor answered with a non-success status; that status is kept."""

    def __init__(self, http_status: int, message: str):
        super().__init__(message, http_status)


class TransportFailure(ChatError):
    pass
