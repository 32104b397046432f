"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ChatProviderError(Exception):
    """Raised when a chat provider returns an error.

    Provider-agnostic — works for OpenRouter, Groq, OpenAI, etc.
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class ImageSearchError(Exception):
    """Raised when the stock-photo provider cannot return an image.

    ``missing_credential`` names the environment variable to fix when the
    failure is a configuration problem rather than an upstream one.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        missing_credential: str | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.missing_credential = missing_credential
        super().__init__(message)


class ContentGenerationError(Exception):
    """Raised when the text-generation service fails or returns non-JSON."""


class CorruptSnapshotError(Exception):
    """Raised when a persisted website snapshot cannot be parsed."""

    def __init__(self, user_id: str, reason: str):
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Stored website for user '{user_id}' is unreadable: {reason}")


class ProfileIncompleteError(Exception):
    """Raised when a business profile is missing required fields."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Business profile is missing: {', '.join(missing)}")


class PublishValidationError(Exception):
    """Raised when a website does not satisfy the publishing preconditions."""
