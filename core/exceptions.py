"""
Errors raised by the domain store.

Business-rule violations (deleting yourself, deleting a location that is
still referenced) are reported as a False result rather than raised;
BusinessRuleViolation only describes the broken rule for notifications
and logs.
"""


class StoreError(Exception):
    """Base class for domain store errors."""
    pass


class AuthError(StoreError):
    """Raised when login credentials don't match a known account."""
    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class NotFoundError(StoreError):
    """Raised when a mutation targets an id absent from its collection."""
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")


class BusinessRuleViolation(StoreError):
    """Describes a rule that prevented an operation."""
    def __init__(self, title: str, detail: str):
        self.title = title
        self.detail = detail
        super().__init__(detail)


class UnexpectedError(StoreError):
    """Raised when a store operation fails for any other reason."""
    pass
