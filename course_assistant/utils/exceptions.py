"""
Custom exception classes for the Course Assistant.

This module defines a hierarchy of custom exceptions:
- Base exception class for the application
- Specific exception types for each failure in the answer pipeline
- Allows for fine-grained error handling throughout the system

Only EscalationPersistenceError is allowed to reach the caller of the
answer pipeline; every other failure degrades to escalation.
"""


class CourseAssistantError(Exception):
    """
    Base exception class for all application-specific errors.

    All custom exceptions in this application inherit from this base class,
    allowing for catching all application errors with a single exception type
    while still maintaining specificity when needed.
    """
    pass


class ConfigurationError(CourseAssistantError):
    """
    Raised when there's a configuration error.

    This exception is raised when:
    - A backend is requested but its credentials are missing
    - Configuration values are invalid
    """
    pass


class ClassificationError(CourseAssistantError):
    """
    Raised when model-based classification fails.

    Never surfaced: the QueryRouter catches it and falls back to the
    keyword strategy.
    """
    pass


class RetrievalError(CourseAssistantError):
    """
    Raised when there's an error during the retrieval process.

    This exception is raised by the retrieval engine when:
    - Query embedding generation fails
    - The content store query fails

    An empty result set is NOT an error.
    """
    pass


class SimilaritySearchUnavailableError(CourseAssistantError):
    """
    Raised by a content store whose similarity search is not provisioned
    (e.g. the match_documents RPC is missing).

    The retrieval engine reacts by switching to an unranked scan.
    """
    pass


class GenerationError(CourseAssistantError):
    """
    Raised when the completion provider fails or times out.
    """
    pass


class EscalationPersistenceError(CourseAssistantError):
    """
    Raised when an escalation record cannot be saved.

    Fatal to the request: the student must not believe their question
    reached a human when it did not.
    """
    pass


class IngestionError(CourseAssistantError):
    """
    Raised when course material cannot be chunked, embedded or stored.
    """
    pass
