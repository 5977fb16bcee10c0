"""Transfer error taxonomy.

Every failure a client can see is a ``TransferError`` subclass. The app
factory registers a handler that renders them as
``{"success": false, "error": ..., "details": ...}`` with ``status_code``.
"""


class TransferError(Exception):
    status_code = 500
    error = "Request failed"

    def __init__(self, error: str | None = None, details: str | None = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error)

    def to_dict(self) -> dict:
        body = {"success": False, "error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class NotFound(TransferError):
    status_code = 404
    error = "File not found"


class Unauthorized(TransferError):
    status_code = 401
    error = "Invalid password"


class Expired(TransferError):
    status_code = 410
    error = "File has expired"


class QuotaExceeded(TransferError):
    status_code = 403
    error = "Maximum download limit reached (3 downloads)"


class ValidationError(TransferError):
    status_code = 400
    error = "Invalid request"


class AssetFetchFailed(TransferError):
    status_code = 500
    error = "Failed to download file"


class StoreUnavailable(TransferError):
    status_code = 500
    error = "Storage backend unavailable"
