"""Root of the loan manager's error hierarchy."""

from typing import Any


class DomainException(Exception):
    """
    A failure the API reports to callers.

    `code` is the machine-readable error code placed in the response
    envelope next to the human-readable `message`.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"
