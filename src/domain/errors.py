"""Domain exceptions

Raised by pure domain functions; use cases translate them into
libs.result.Error values using the carried code.
"""


class DomainError(Exception):
    code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class InvoiceValidationError(DomainError):
    """Input rejected before any state change"""

    code = "VALIDATION_ERROR"


class InvoiceTransitionError(DomainError):
    """Requested status transition is not allowed from the current status"""

    code = "INVALID_INVOICE_STATUS"
