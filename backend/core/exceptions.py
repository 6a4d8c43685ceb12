"""Custom exception hierarchy for the Intent Registry.

Each kind carries the HTTP status the API layer answers with.
"""


class IntentRegistryError(Exception):
    """Base error."""
    http_status = 500

    def __init__(self, message: str, code: str = "INTENT_REGISTRY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(IntentRegistryError):
    """Malformed input: empty label, invalid status, non-string list items."""
    http_status = 400

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(IntentRegistryError):
    """Unknown intent id, or a referenced scope that does not exist."""
    http_status = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="NOT_FOUND")


class ConflictError(IntentRegistryError):
    """Label already in use, or exclusion already present."""
    http_status = 409

    def __init__(self, message: str = "Conflict"):
        super().__init__(message, code="CONFLICT")


class BusinessRuleError(IntentRegistryError):
    """Operation not allowed for this intent (e.g. excluding a non-default intent)."""
    # Caller error rather than a server fault, so answered like ValidationError
    http_status = 400

    def __init__(self, message: str = "Business rule violated"):
        super().__init__(message, code="BUSINESS_RULE_VIOLATION")


class ScopeLookupError(IntentRegistryError):
    """The tenant service could not answer an existence check."""
    # Upstream tenant service failure; kept apart from the generic 500
    http_status = 502

    def __init__(self, message: str = "Scope lookup failed"):
        super().__init__(message, code="SCOPE_LOOKUP_FAILED")
