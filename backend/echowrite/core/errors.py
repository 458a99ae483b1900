"""Error taxonomy shared by the relay endpoints and the client service layer."""
from enum import Enum


class ErrorKind(str, Enum):
    unauthenticated = "unauthenticated"
    profile_missing = "profile_missing"
    quota_exceeded = "quota_exceeded"
    invalid_input = "invalid_input"
    unknown_action = "unknown_action"
    rate_limited = "rate_limited"
    quota_exhausted = "quota_exhausted"
    upstream_error = "upstream_error"
    # recovered locally by the response normalizer, never sent to clients
    malformed_upstream_response = "malformed_upstream_response"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.unauthenticated: 401,
    ErrorKind.profile_missing: 403,
    ErrorKind.quota_exceeded: 403,
    ErrorKind.invalid_input: 400,
    ErrorKind.unknown_action: 400,
    ErrorKind.rate_limited: 429,
    ErrorKind.quota_exhausted: 402,
    ErrorKind.upstream_error: 500,
    ErrorKind.malformed_upstream_response: 500,
}


class EchoWriteError(Exception):
    kind: ErrorKind = ErrorKind.upstream_error
    default_message = "An error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.message, "code": self.kind.value}


class Unauthenticated(EchoWriteError):
    kind = ErrorKind.unauthenticated
    default_message = "Unauthorized"


class ProfileMissing(EchoWriteError):
    kind = ErrorKind.profile_missing
    default_message = "User profile not found"


class QuotaExceeded(EchoWriteError):
    kind = ErrorKind.quota_exceeded
    default_message = "Usage limit exceeded. Upgrade to premium to continue."


class InvalidInput(EchoWriteError):
    kind = ErrorKind.invalid_input
    default_message = "Invalid request"


class UnknownAction(EchoWriteError):
    kind = ErrorKind.unknown_action
    default_message = "Invalid action"


class RateLimited(EchoWriteError):
    kind = ErrorKind.rate_limited
    default_message = "Rate limit exceeded. Please try again in a moment."


class QuotaExhausted(EchoWriteError):
    kind = ErrorKind.quota_exhausted
    default_message = "AI credits exhausted. Please add credits to continue."


class UpstreamError(EchoWriteError):
    kind = ErrorKind.upstream_error
    default_message = "AI gateway error"


class MalformedUpstreamResponse(EchoWriteError):
    kind = ErrorKind.malformed_upstream_response
    default_message = "AI response could not be parsed"
