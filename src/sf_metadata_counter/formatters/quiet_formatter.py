"""Quiet formatter: the total only."""

from ..models import CountContext, MetadataReport
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    def render(self, report: MetadataReport, context: CountContext) -> None:
        print(self.format(report, context))

    def format(self, report: MetadataReport, context: CountContext) -> str:
        return str(report.total)
