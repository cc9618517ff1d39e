"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    code = "domain_error"


class InvalidInputError(DomainException):
    """Input records are inconsistent (duplicate ids, unknown references)"""

    code = "invalid_input"


class InvalidAmountError(InvalidInputError):
    """Monetary input is negative, non-finite or not a number"""

    code = "invalid_amount"


class InvalidSeriesError(InvalidInputError):
    """Time series periods are malformed, duplicated or not contiguous"""

    code = "invalid_series"


class DoesNotConvergeError(DomainException):
    """Payoff simulation hit the month cap with debt still outstanding"""

    code = "does_not_converge"

    def __init__(self, max_months: int, remaining_balance_cents: int):
        self.max_months = max_months
        self.remaining_balance_cents = remaining_balance_cents
        super().__init__(
            f"Debts not retired after {max_months} months "
            f"({remaining_balance_cents} cents outstanding)"
        )
