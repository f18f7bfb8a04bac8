from enum import Enum

class FilterEventType(str, Enum):
    TERM_ADDED = "filter.term_added"
    TERM_MERGED = "filter.term_merged"
    TERM_REMOVED = "filter.term_removed"

    CLEARED = "filter.cleared"
