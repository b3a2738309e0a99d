"""
Status component - Active / expiring / lapsed classification of members.
"""

from ._impl import (
    DEFAULT_EXPIRING_WINDOW_DAYS,
    DEFAULT_GRACE_WINDOW_DAYS,
    SHORTLIST_CAP,
    classify,
    member_end,
    parse_timestamp,
    status_of,
)
from .component import run, run_classify, run_label
from .models import ClassifyInput, ClassifyOutput, StatusSummary
from .ports import MemberSourcePort, StatusRulesPort, TimePort

__all__ = [
    # Entry points
    "run",
    "run_classify",
    "run_label",
    # Functional core
    "classify",
    "status_of",
    "parse_timestamp",
    "member_end",
    # Constants
    "DEFAULT_EXPIRING_WINDOW_DAYS",
    "DEFAULT_GRACE_WINDOW_DAYS",
    "SHORTLIST_CAP",
    # Models
    "ClassifyInput",
    "ClassifyOutput",
    "StatusSummary",
    # Ports
    "MemberSourcePort",
    "StatusRulesPort",
    "TimePort",
]
