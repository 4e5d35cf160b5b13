"""Custom exceptions for the package."""


class AuditDiffError(Exception):
    """Base exception for all auditdiff errors."""

    pass


class FieldMapError(AuditDiffError):
    """Custom exception for invalid field map configuration files."""

    pass


class ValueRenderError(AuditDiffError):
    """Custom exception for a value that could not be rendered for comparison."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
