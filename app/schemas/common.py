from datetime import date
from pydantic import BaseModel


# ─── Error Response ───────────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    timestamp: date
    code:      int
    message:   str


class ValidationErrorResponse(ErrorResponse):
    validationErrors: dict[str, str]


# ─── Helper Functions ─────────────────────────────────────────────────────────
def error_response(code: int, message: str) -> dict:
    """Return the standardized error dict (JSON-ready)."""
    return {"timestamp": date.today().isoformat(), "code": code, "message": message}


def validation_error_response(code: int, errors: dict[str, str]) -> dict:
    """Error dict for request validation failures, keyed by field name."""
    body = error_response(code, "Validation failed")
    body["validationErrors"] = errors
    return body
