"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .report import print_entry, print_scan, print_summary, report_lines

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "print_entry",
    "print_scan",
    "print_summary",
    "report_lines",
]
