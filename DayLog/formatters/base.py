from abc import ABC, abstractmethod

from DayLog.parsing.line_parser import format_log


class SummaryFormatter(ABC):
    """Turns the raw text of a day log into a Markdown table."""

    name: str = "base"

    @abstractmethod
    def format(self, log_text: str) -> str:
        """Return table text, or raise a SummaryError. Never both."""


class LocalFormatter(SummaryFormatter):
    """Offline heuristic parser. Needs no configuration and never fails."""

    name = "local"

    def format(self, log_text: str) -> str:
        return format_log(log_text)
