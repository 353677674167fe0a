from http import HTTPStatus


class ApiError(Exception):
    """Base class for errors that end a request with a client-facing status."""
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedBodyError(ApiError):
    status = HTTPStatus.BAD_REQUEST


class InvalidIdentifierError(ApiError):
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str = "Invalid ID"):
        super().__init__(message)


class NotFoundError(ApiError):
    status = HTTPStatus.NOT_FOUND


class InvalidCredentialsError(ApiError):
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)
