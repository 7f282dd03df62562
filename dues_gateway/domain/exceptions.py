"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidDateError(DomainException):
    """Date value is missing or cannot be read as a calendar date"""

    pass


class InvalidBillingConfigError(DomainException):
    """Billing configuration record is not usable"""

    pass
