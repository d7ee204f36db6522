"""
Domain error taxonomy.

Services raise these; the API layer maps them to HTTP responses in
``taskify.main``.
"""


class TaskifyError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskifyError):
    """A required field is empty or invalid. Re-prompt, do not retry."""


class NotFoundError(TaskifyError):
    """A referenced project, task or status does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class AuthorizationError(TaskifyError):
    """The resolved resource is owned by a different user."""

    def __init__(self, entity: str, entity_id: str, user_id: str):
        super().__init__(f"User {user_id} may not access {entity} {entity_id}")
        self.entity = entity
        self.entity_id = entity_id
        self.user_id = user_id


class StoreError(TaskifyError):
    """The underlying database failed. Reads may be retried, cascading writes may not."""
