from fastapi.responses import JSONResponse

from minutes_studio.models.minutes_model import ErrorResponse


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
