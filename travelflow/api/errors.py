# travelflow/api/errors.py
"""Exception types shared by the services and the HTTP layer."""

from typing import Optional


class TravelFlowError(Exception):
    """Base class for every error raised by the travel planner."""

    http_status = 500


class ValidationError(TravelFlowError):
    """Caller supplied data that breaks an itinerary or request rule."""

    http_status = 400


class NotFoundError(TravelFlowError):
    """A day, activity, poll or recommendation id did not match anything."""

    http_status = 404


class ReplyFormatError(TravelFlowError):
    """The model answered, but not in the format we asked for."""

    http_status = 502
    user_message = "AI 응답을 처리하는 중 오류가 발생했습니다."


class StaleResponseError(TravelFlowError):
    """A reply arrived for a request that a newer request has superseded."""

    http_status = 409


# ---------------------------------------------------------------------------
# Text-generation endpoint failures
# ---------------------------------------------------------------------------

class LLMError(TravelFlowError):
    """Failure talking to the text-generation endpoint."""

    http_status = 502
    user_message = "AI 서비스 호출 중 오류가 발생했습니다."

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialError(LLMError):
    http_status = 401
    user_message = "Gemini API 키가 필요합니다."


class InvalidCredentialError(LLMError):
    http_status = 401
    user_message = "Gemini API 키가 올바르지 않습니다. 키를 확인해주세요."


class ForbiddenCredentialError(LLMError):
    http_status = 403
    user_message = "Gemini API 키에 이 요청에 대한 권한이 없습니다."


class RateLimitError(LLMError):
    http_status = 429
    user_message = "요청이 너무 많습니다. 잠시 후 다시 시도해주세요."


class BadRequestError(LLMError):
    http_status = 400
    user_message = "AI 요청 형식이 올바르지 않습니다."


class UpstreamServiceError(LLMError):
    http_status = 502
    user_message = "AI 서비스에 일시적인 문제가 있습니다."


class ConnectivityError(LLMError):
    http_status = 503
    user_message = "네트워크 연결을 확인해주세요."


def classify_status(status_code: int, detail: str = "") -> LLMError:
    """Map a non-2xx status from the model endpoint onto an LLMError."""
    message = f"Gemini API call failed with status {status_code}"
    if detail:
        message = f"{message}: {detail}"

    if status_code == 401:
        return InvalidCredentialError(message, status_code)
    if status_code == 403:
        return ForbiddenCredentialError(message, status_code)
    if status_code == 429:
        return RateLimitError(message, status_code)
    if 400 <= status_code < 500:
        return BadRequestError(message, status_code)
    return UpstreamServiceError(message, status_code)
