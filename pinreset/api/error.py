from fastapi import status
from pinreset.libs.result import Error


class ClientError(Exception):
    """Error caused by the request; its message is safe to show the caller"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        return {"code": self.base_error.code, "message": self.base_error.message}


class ServerError(Exception):
    """
    Error inside the service

    Only the code reaches the caller. The message may name storage keys or
    database details and stays in the log.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Internal server error"

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        return {"code": self.base_error.code, "message": self.public_message}
