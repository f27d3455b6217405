"""
Campus error taxonomy.

Services raise these; the DRF exception handler (config.exceptions) renders
them as {"detail": message, "code": code} with the matching HTTP status.
"""
from rest_framework import status


class CampusError(Exception):
    """Base class: carries a human-readable message, a machine code and an HTTP status."""
    code = 'error'
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Request failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CampusError):
    """Bad input: non-positive amounts, discount above fee, full batch, score out of range."""
    code = 'validation_error'
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid input'


class NotFoundError(CampusError):
    code = 'not_found'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class ConflictError(CampusError):
    """Lost a race (last seat, double payment) or duplicate submission."""
    code = 'conflict'
    status_code = status.HTTP_409_CONFLICT
    default_message = 'Conflicting update'


class StoreError(CampusError):
    """Underlying data-store failure."""
    code = 'store_error'
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = 'Data store unavailable'
