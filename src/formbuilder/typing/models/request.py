"""Inbound request context."""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubmittedData(BaseModel):
    """Read-only snapshot of one inbound request.

    `values` maps field names to the submitted scalars, i.e. the decoded form
    body for POST requests or the query string for GET requests.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    method: str = "GET"
    values: dict[str, Any] = Field(default_factory=dict)

    @field_validator("method")
    @classmethod
    def _normalize_method(cls, value: str) -> str:
        """Upper-case the HTTP method.

        Args:
            value (str): Raw method.

        Returns:
            str: Upper-cased method.
        """
        return value.strip().upper()

    @classmethod
    def from_encoded(cls, payload: str, *, method: str = "POST") -> SubmittedData:
        """Build the snapshot from a URL-encoded body or query string.

        Repeated keys keep their first occurrence.

        Args:
            payload (str): URL-encoded pairs, e.g. `frmID=user&txtName=Jaime`.
            method (str): HTTP method of the request.

        Returns:
            SubmittedData: Parsed snapshot.
        """
        values: dict[str, str] = {}
        for key, value in parse_qsl(payload.lstrip("?"), keep_blank_values=True):
            values.setdefault(key, value)
        return cls(method=method, values=values)

    def get(self, name: str) -> Any:
        """Return the submitted scalar for `name`, or None when absent."""
        raw = self.values.get(name)
        if isinstance(raw, list | tuple):
            return raw[0] if raw else None
        return raw

    def is_filled(self, name: str) -> bool:
        """Return whether `name` was submitted with a non-empty value."""
        value = self.get(name)
        return value is not None and value != ""
