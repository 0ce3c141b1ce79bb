from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class FetchError(RuntimeError):
    """Raised when any request of a fetch batch fails; the whole batch is discarded."""

    def __init__(self, location: str, kind: str, cause: BaseException | str) -> None:
        self.location = location
        self.kind = kind
        self.cause = cause
        super().__init__(f"GET {location} failed ({kind}): {cause}")
