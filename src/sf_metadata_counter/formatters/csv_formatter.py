"""CSV formatter for count reports."""

import csv
import io

from ..models import CountContext, MetadataReport
from .base import BaseFormatter


class CsvFormatter(BaseFormatter):
    """Render one ``type,count`` row per metadata type plus a TOTAL row."""

    def render(self, report: MetadataReport, context: CountContext) -> None:
        print(self.format(report, context), end="")

    def format(self, report: MetadataReport, context: CountContext) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["type", "count"])
        for type_name, count in report.breakdown():
            writer.writerow([type_name, count])
        writer.writerow(["TOTAL", report.total])
        return output.getvalue()
