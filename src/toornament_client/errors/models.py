"""Error envelope models returned by the Toornament service."""

from dataclasses import dataclass, field
from typing import Any

import httpx

# RFC 7807 members, accepted as a fallback envelope.
PROBLEM_FIELDS = frozenset({"type", "title", "status", "detail", "instance"})


@dataclass
class ServiceError:
    """One entry of the ``errors`` array in a Toornament error body."""

    message: str | None = None
    scope: str | None = None  # "query", "body", "header"
    property_path: str | None = None
    invalid_value: Any = None
    type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceError":
        return cls(
            message=data.get("message"),
            scope=data.get("scope"),
            property_path=data.get("property_path"),
            invalid_value=data.get("invalid_value"),
            type=data.get("type"),
        )

    def describe(self) -> str:
        text = self.message or self.type or "unknown error"
        if self.property_path:
            text = f"{self.property_path}: {text}"
        if self.scope:
            text = f"[{self.scope}] {text}"
        return text


@dataclass
class ErrorEnvelope:
    """Decoded error body.

    The service answers with ``{"errors": [...]}`` on resource endpoints and
    with the OAuth2 shape ``{"error": ..., "error_description": ...}`` on the
    token endpoint. Bodies that only carry RFC 7807 members are folded into
    ``title``/``detail``.
    """

    errors: list[ServiceError] = field(default_factory=list)
    error: str | None = None
    error_description: str | None = None
    title: str | None = None
    detail: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorEnvelope | None":
        """Parse an error envelope from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            ErrorEnvelope or None if the body is not a recognised error shape
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            return None
        return cls.from_data(data)

    @classmethod
    def from_data(cls, data: Any) -> "ErrorEnvelope | None":
        if not isinstance(data, dict):
            return None

        envelope = cls()
        raw_errors = data.get("errors")
        if isinstance(raw_errors, list):
            envelope.errors = [ServiceError.from_dict(e) for e in raw_errors if isinstance(e, dict)]
        elif isinstance(raw_errors, dict):
            envelope.errors = [ServiceError.from_dict(raw_errors)]

        if isinstance(data.get("error"), str):
            envelope.error = data["error"]
            envelope.error_description = data.get("error_description")
        elif isinstance(data.get("message"), str) and not envelope.errors:
            envelope.detail = data["message"]

        if PROBLEM_FIELDS & data.keys():
            envelope.title = data.get("title")
            envelope.detail = data.get("detail") or envelope.detail

        if envelope.is_empty():
            return None
        return envelope

    def is_empty(self) -> bool:
        return not (self.errors or self.error or self.title or self.detail)

    def to_exception_message(self) -> str:
        """Convert the envelope to an exception message."""
        lines = []

        if self.error:
            if self.error_description:
                lines.append(f"{self.error}: {self.error_description}")
            else:
                lines.append(self.error)

        if self.title:
            lines.append(self.title)
        if self.detail and self.detail != self.title:
            lines.append(self.detail)

        for error in self.errors:
            lines.append(error.describe())

        return "\n".join(lines) if lines else "Unknown API error"

    def field_errors(self) -> list[dict[str, Any]]:
        """Per-field errors in the shape carried by ``ValidationError``."""
        return [
            {"field": e.property_path, "message": e.message, "invalid_value": e.invalid_value}
            for e in self.errors
            if e.property_path
        ]
