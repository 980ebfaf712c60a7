"""Error normalization.

Turns whatever a failed call produced (an HTTP status, a decoded body, or
the exception that prevented a response) into a single `ApiError`.

Precedence, strongest first:

1. a structured server body ``{"error": {"code": ...}}`` names the code;
2. the HTTP status maps to a code through a fixed table;
3. no status at all means the request never got a response: NETWORK_ERROR.

Everything here is pure: no I/O, no state, and `classify` never raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from core.domain.errors import ApiError, ApiErrorCode
from core.domain.language import Language, message_for
from core.domain.models import ServerErrorBody

_STATUS_CODES: dict[int, ApiErrorCode] = {
    400: ApiErrorCode.VALIDATION_ERROR,
    401: ApiErrorCode.UNAUTHORIZED,
    403: ApiErrorCode.FORBIDDEN,
    404: ApiErrorCode.NOT_FOUND,
    410: ApiErrorCode.EXPIRED,
}


def map_http_status_to_code(status: int) -> ApiErrorCode:
    """Map an HTTP status to an error code (anything unlisted is UNKNOWN_ERROR)."""

    code = _STATUS_CODES.get(status)
    if code is not None:
        return code
    if status >= 500:
        return ApiErrorCode.SERVER_ERROR
    return ApiErrorCode.UNKNOWN_ERROR


def parse_server_error_body(body: Any) -> ServerErrorBody | None:
    """Decode `body` as a structured server error, or return None."""

    if not isinstance(body, dict):
        return None
    try:
        return ServerErrorBody.model_validate(body)
    except ValidationError:
        return None


def classify(
    status: int | None = None,
    body: Any = None,
    fallback_message: str | None = None,
    *,
    language: Language = Language.ENGLISH,
) -> ApiError:
    """Build the `ApiError` for a failed call.

    Args:
        status: HTTP status of the response, or None when none was received.
        body: Decoded response body, or the exception raised by the transport.
        fallback_message: Message used when the server did not provide one.
        language: Language of the generic placeholder messages.
    """

    if status is None:
        return ApiError(
            ApiErrorCode.NETWORK_ERROR,
            fallback_message or message_for("network_failed", language),
            details=body,
        )

    structured = parse_server_error_body(body)
    if structured is not None:
        server_code = structured.error.code.strip()
        server_message = structured.error.message
        code: ApiErrorCode | str
        if server_code:
            code = ApiErrorCode.coerce(server_code)
        else:
            code = map_http_status_to_code(status)
        if isinstance(server_message, str):
            message = server_message
        else:
            message = fallback_message or message_for("generic", language)
        return ApiError(code, message, status=status, details=body)

    return ApiError(
        map_http_status_to_code(status),
        fallback_message or message_for("generic", language),
        status=status,
        details=body,
    )
