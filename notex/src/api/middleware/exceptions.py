"""Error types returned by the notex API.

Every error is rendered as an ErrorResponseModel body with a matching HTTP
status code.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from flask import Response, jsonify
from pydantic import BaseModel, Field

ErrorDetails = Union[str, List[Dict[str, Any]]]


class ErrorResponseModel(BaseModel):
    """JSON body of every error response."""

    error: str = Field(..., description="Short error message")
    details: Optional[ErrorDetails] = Field(
        None, description="What was wrong with the request, if known"
    )
    status_code: int = Field(400, description="HTTP status code")


class APIError(Exception):
    """Base class for errors that map directly to an HTTP response.

    Subclasses set ``status_code`` and ``default_message``.
    """

    status_code = 500
    default_message = "Request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[ErrorDetails] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> Tuple[Response, int]:
        """Render the error as a JSON response and status code."""
        body = ErrorResponseModel(
            error=self.message, details=self.details, status_code=self.status_code
        )
        return jsonify(body.model_dump()), self.status_code


class ValidationError(APIError):
    """Request body or chunk parameters were rejected."""

    status_code = 400
    default_message = "Invalid request data"


class InsufficientStorageError(APIError):
    """The chunk index cannot hold the chunks of a new source."""

    status_code = 507
    default_message = "Index capacity exceeded"
