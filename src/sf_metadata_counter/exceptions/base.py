"""Root of the sf-metadata-counter error hierarchy."""

from typing import Any, Dict, Mapping, Optional


class MetadataCounterError(Exception):
    """Raised for every failure the counter reports to its callers.

    ``details`` holds the structured context of the failure (the path that
    could not be listed, the candidates that were tried). Values are kept as
    strings so they print the same on the terminal and in watcher messages.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, str] = {key: str(value) for key, value in (details or {}).items()}

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form forwarded to report listeners."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
