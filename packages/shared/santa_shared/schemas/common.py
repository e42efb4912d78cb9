from enum import Enum
from typing import List

from pydantic import BaseModel


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    BAD_REQUEST = "bad_request"
    STORAGE_ERROR = "storage_error"

# HTTP status used by the API layer for each failure classification
ERROR_STATUS_CODES: dict["ErrorKind", int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.STORAGE_ERROR: 500,
}

class FieldErrorDetail(BaseModel):
    field: str
    message: str

class ErrorResponse(BaseModel):
    """Error body; the classification is sent in the X-Error-Kind header."""
    detail: List[FieldErrorDetail]
