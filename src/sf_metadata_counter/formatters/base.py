"""Base formatter interface for count report rendering."""

from abc import ABC, abstractmethod

from ..models import CountContext, MetadataReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: MetadataReport, context: CountContext) -> None:
        """Render the report to stdout."""

    @abstractmethod
    def format(self, report: MetadataReport, context: CountContext) -> str:
        """Return formatted string representation of the report."""
