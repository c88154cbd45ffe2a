"""
Domain errors.

Every rule violation raised by a service is an ``EntityError``. The ``code``
is built from a short caller-supplied prefix plus the suffix of its kind
(``"User"`` + ``"AlreadyExists"`` -> ``"UserAlreadyExists"``), so callers can
branch on ``code`` or ``kind`` without parsing ``message``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    ALREADY_EXISTS = "AlreadyExists"
    NOT_AUTHORIZED = "NotAuthorized"
    INVALID_ARGUMENT = "InvalidArgument"
    NOT_FOUND = "NotFound"

    @property
    def suffix(self) -> str:
        return self.value


class EntityError(Exception):
    """A failed domain operation, tagged with its kind."""

    def __init__(self, kind: ErrorKind, code: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.code = code
        self.message = message

    @classmethod
    def _of_kind(cls, kind: ErrorKind, prefix: str, message: str) -> "EntityError":
        return cls(kind, f"{prefix}{kind.suffix}", message)

    @classmethod
    def already_exists(cls, prefix: str, message: str) -> "EntityError":
        """A uniquely identified resource would be duplicated."""
        return cls._of_kind(ErrorKind.ALREADY_EXISTS, prefix, message)

    @classmethod
    def not_authorized(cls, prefix: str, message: str) -> "EntityError":
        """The acting user may not perform the operation."""
        return cls._of_kind(ErrorKind.NOT_AUTHORIZED, prefix, message)

    @classmethod
    def invalid_argument(cls, prefix: str, message: str) -> "EntityError":
        """Caller input is malformed, out of range or inconsistent."""
        return cls._of_kind(ErrorKind.INVALID_ARGUMENT, prefix, message)

    @classmethod
    def not_found(cls, prefix: str, message: str) -> "EntityError":
        return cls._of_kind(ErrorKind.NOT_FOUND, prefix, message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}

    def __repr__(self) -> str:
        return f"<EntityError code={self.code!r} message={self.message!r}>"
