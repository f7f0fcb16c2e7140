"""Export — structured attenuation results (CSV, JSON)."""

from calcatten.export.csv_export import CsvExporter
from calcatten.export.json_export import JsonExporter

__all__ = [
    "CsvExporter",
    "JsonExporter",
]
