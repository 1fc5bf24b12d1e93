# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class CyclicGraphError(BusinessRuleError):
    """Raised when the dependency graph cannot be ordered topologically."""
    def __init__(
        self,
        message: str,
        *,
        cycle: list[str] | None = None,
        unresolved_ids: list[str] | None = None,
        code: str | None = "SCHEDULE_CYCLE",
    ):
        super().__init__(message, code=code)
        self.cycle = list(cycle or [])
        self.unresolved_ids = list(unresolved_ids or [])
