"""Custom exception hierarchy for loan-ledger."""


class LedgerError(Exception):
    """Base exception for all loan-ledger errors."""


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class LoanNotFoundError(EntityNotFoundError):
    """Raised when a loan id does not resolve to a loan."""


class CustomerNotFoundError(EntityNotFoundError):
    """Raised when a customer id does not resolve to a customer."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class ValidationError(LedgerError, ValueError):
    """Raised when an argument fails validation."""


class InvalidLoanTermsError(ValidationError):
    """Raised when principal, period or rate is not a positive finite number."""


class InvalidEntityStateError(LedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(LedgerError):
    """Raised when a sink operation fails."""
