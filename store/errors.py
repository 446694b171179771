"""
Error taxonomy for the store API.

Views and workflows raise these; ``store.middleware.ApiErrorMiddleware``
turns them into ``{"message": ...}`` JSON responses with the matching status.
"""


class StoreError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(StoreError):
    status_code = 400
    default_message = "Invalid request"


class EmptyCartError(StoreError):
    status_code = 400
    default_message = "Cart is empty"


class NotAuthenticated(StoreError):
    status_code = 401
    default_message = "Unauthorized"


class PermissionDenied(StoreError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(StoreError):
    status_code = 404
    default_message = "Not found"


class PaymentError(StoreError):
    status_code = 500
    default_message = "Error creating payment intent"
