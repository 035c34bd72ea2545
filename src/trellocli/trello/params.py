"""Query-string parameters for Trello API requests."""

from __future__ import annotations

from urllib.parse import urlencode


class RequestParams:
    """Accumulates multi-valued query parameters.

    Trello expects a multi-valued parameter as a single comma-separated
    value (``fields=name,desc``), so values added under the same key are
    joined with commas on serialization, in the order they were added.
    """

    def __init__(self) -> None:
        self._arguments: dict[str, list[str]] = {}

    def add_param(self, key: str, value: str) -> None:
        """Append a value for key. Repeated values are kept."""
        self._arguments.setdefault(key, []).append(value)

    def to_values(self) -> dict[str, str]:
        """Return a mapping of each key to its comma-joined values."""
        return {key: ",".join(values) for key, values in self._arguments.items()}

    def encode(self) -> str:
        """Encode the parameters as a URL query string."""
        return urlencode(self.to_values())

    def __len__(self) -> int:
        return len(self._arguments)

    def __repr__(self) -> str:
        return f"RequestParams({self._arguments!r})"
