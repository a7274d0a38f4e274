"""
Domain exceptions.

Services raise these; the HTTP layer maps each class to its status code in
one place (see middleware.error_handler). Every failure is scoped to the
request that caused it.
"""

from __future__ import annotations


class FinanzWissenError(Exception):
    """Base class for all domain errors."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class NotFoundError(FinanzWissenError):
    """A referenced entity (course, question, challenge, badge, ...) does not exist."""

    status_code = 404

    def __init__(self, entity_type: str, entity_id: object, message: str | None = None) -> None:
        super().__init__(
            message or f"{entity_type} with id {entity_id} not found",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class CourseNotStartedError(NotFoundError):
    """Progress was reported for a course the user never started."""

    def __init__(self, course_id: int) -> None:
        super().__init__("UserCourse", course_id, f"Course {course_id} not found or not started")


class DuplicateUsernameError(FinanzWissenError):
    status_code = 409

    def __init__(self, username: str) -> None:
        super().__init__("Username already exists", {"username": username})
        self.username = username


class InvalidCredentialsError(FinanzWissenError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class ValidationFailureError(FinanzWissenError):
    """Malformed input to a mutating call, e.g. a vote outside {+1, -1}."""

    status_code = 422

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class UnauthorizedError(FinanzWissenError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)
