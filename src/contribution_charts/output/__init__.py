"""Output handlers for Contribution Charts."""

from contribution_charts.output.console import Console
from contribution_charts.output.json_writer import read_json, write_json_report

__all__ = [
    "read_json",
    "write_json_report",
    "Console",
]
