"""
Error taxonomy shared by both services.

ValidationError and ConflictError are caller-fixable (400), NotFoundError maps
to 404. RemoteUnavailableError never reaches the HTTP layer on its own: the
reconciliation service decides whether it becomes a validation failure or a
logged warning.
"""


class InventoryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    status_code = 400


class ConflictError(InventoryError):
    status_code = 400


class NotFoundError(InventoryError):
    status_code = 404


class RemoteUnavailableError(InventoryError):
    """The products service could not be reached or answered with an error."""

    status_code = 502
