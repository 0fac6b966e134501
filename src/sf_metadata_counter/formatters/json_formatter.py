"""JSON formatter for count reports."""

import json

from ..models import CountContext, MetadataReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as JSON with alphabetically ordered types."""

    def render(self, report: MetadataReport, context: CountContext) -> None:
        print(self.format(report, context))

    def format(self, report: MetadataReport, context: CountContext) -> str:
        data = report.to_dict()
        if context.source_root is not None:
            data["source_root"] = str(context.source_root.path)
            data["layout"] = context.layout
        return json.dumps(data, indent=2)
