class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class RecordNotFoundError(DomainError):
    """Raised when an attendance record or shift cannot be found."""


class RegularizationQuotaExceeded(DomainError):
    """Raised when an employee has used every regularization for the month."""

    def __init__(self, *, employee_id: str, year: int, month: int, used: int, quota: int):
        super().__init__(f"Regularization limit reached: {used}/{quota} used for {month:02d}/{year}")
        self.employee_id = employee_id
        self.year = year
        self.month = month
        self.used = used
        self.quota = quota
