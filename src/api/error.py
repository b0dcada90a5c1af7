"""API error handling

ClientError carries a use case Error to the HTTP layer; the handler
registered in create_app renders it as {"error": {"code", "message"}}.
"""

from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app.use_cases.invoicing.errors import ErrorKind, error_kind

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    @classmethod
    def from_error(cls, error: Error, status_code: Optional[int] = None) -> "ClientError":
        """Build a ClientError whose status follows the error's kind"""
        return cls(error, status_code=status_code or STATUS_BY_KIND[error_kind(error)])


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )
