class AuditError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.message = message


class AuthError(AuditError):
    status_code = 401


class ValidationError(AuditError):
    status_code = 400
