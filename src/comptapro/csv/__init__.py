"""CSV export module."""

from comptapro.csv.exporter import CsvExporter, activity_log_csv

__all__ = ["CsvExporter", "activity_log_csv"]
