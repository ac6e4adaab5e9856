"""
Exceptions raised by the ingestion and search pipeline.
"""


class RagError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigurationError(RagError):
    """Invalid or missing configuration value."""
    pass


class StoreError(RagError):
    """Reading or writing a JSON table failed."""
    pass


class InvalidTableName(StoreError):
    """Table name is not a usable filename component."""
    pass


class EmbeddingError(RagError):
    """The embedding provider call failed or returned an unusable payload."""
    pass


class LLMError(RagError):
    """The LLM provider call failed."""
    pass


class DocumentError(RagError):
    """A document could not be read or parsed."""
    pass


class EmptyDocumentError(DocumentError):
    """A document contained no extractable text."""
    pass
