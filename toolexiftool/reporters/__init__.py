"""
Headless report generation
"""

from typing import Optional

from .base import BaseReporter
from .text import TextReporter
from .json import JSONReporter
from .csv import CSVReporter

REPORTERS = {
    'text': TextReporter,
    'json': JSONReporter,
    'csv': CSVReporter,
}


def get_reporter(format_name: str, **kwargs) -> Optional[BaseReporter]:
    """Return a reporter instance for `format_name`, or None if unknown."""
    reporter_class = REPORTERS.get(format_name.lower())
    if reporter_class is None:
        return None
    return reporter_class(**kwargs)


__all__ = ['BaseReporter', 'TextReporter', 'JSONReporter', 'CSVReporter', 'get_reporter']
