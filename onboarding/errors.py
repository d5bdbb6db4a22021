"""Domain errors. Each carries the HTTP status the API answers with."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class NotFound(AppError):
    status_code = 404


class AuthError(AppError):
    status_code = 401


class RateLimited(AppError):
    status_code = 429

    def __init__(self, message: str = "Too many login attempts"):
        super().__init__(message)


class StoreError(AppError):
    # the underlying cause is logged, clients only ever see "Server error"
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
