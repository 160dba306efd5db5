"""Domain-specific exceptions: framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RecordValidationError(Exception):
    """Raised when a submission is refused because field validation failed.

    Carries the same field → message mapping the validator produced, so the
    caller can show every error at once.
    """

    def __init__(self, entity_type: str, errors: dict[str, str]):
        self.entity_type = entity_type
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"{entity_type} failed validation: {fields}")


class PermissionDeniedError(Exception):
    """Raised when the current role lacks the capability for an operation."""

    def __init__(self, role: str, capability: str):
        self.role = role
        self.capability = capability
        super().__init__(f"Role '{role}' is not allowed to {capability}")


class ImportFormatError(Exception):
    """Raised when an imported asset document has an unexpected shape."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
