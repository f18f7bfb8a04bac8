import logging
from typing import Callable, List, Optional, Tuple

from jsonpath_filters.constants.app_constants import AppConstants
from jsonpath_filters.constants.app_message import AppMessage
from jsonpath_filters.constants.event_type import FilterEventType
from jsonpath_filters.model.filter_event_model import FilterSetEvent
from jsonpath_filters.model.term_model import ComparisonKind, TermPayload
from jsonpath_filters.utils.filter_term import Term, InvalidTermError

"""
================================================================================
JSONPath Filter Builder – Usage Guide
================================================================================
Purpose:
    Collects user entered filters (typed key/value pairs, free text search or
    compact 'key:value' / 'key~value' strings) and compiles them into a single
    JSONPath filter predicate for a document store.

-------------------------------------------------------------------------------
1. BASIC USAGE
-------------------------------------------------------------------------------
    filters = BasicFilters()
    filters.add_prop_eq('quick', 'brown').add_prop_like('jumps', 'fox')
    print(filters.create_json_path())
    # Output: $[?((@.quick=="brown")&&(/fox/.test(@.jumps)))]

-------------------------------------------------------------------------------
2. MERGING
-------------------------------------------------------------------------------
    Terms with the same key and comparison kind are merged, the newest value
    first:
    BasicFilters().add_prop_eq('quick', 'brown').add_prop_eq('quick', 'fox')
    # Output: $[?(@.quick=="fox"||@.quick=="brown")]

-------------------------------------------------------------------------------
3. FREE TEXT
-------------------------------------------------------------------------------
    BasicFilters().set_all_like('quick')
    # Output: $[?(/quick/.test(JSON.stringify(@)))]

-------------------------------------------------------------------------------
4. COMPACT STRINGS
-------------------------------------------------------------------------------
    'key:value'  -> EQUALS
    'key~value'  -> MATCHES on key
    'text'       -> MATCHES on the whole document
    Whitespace is removed. Merged terms render as 'key:v1,v2' but the comma
    is not split again when parsing, so only single value terms round trip.

-------------------------------------------------------------------------------
5. CHANGE NOTIFICATION
-------------------------------------------------------------------------------
    filters.subscribe(lambda event: print(event.event_type))
    Listeners run synchronously after every mutation that changed the set.
================================================================================
"""

logger = logging.getLogger(__name__)

FilterSetListener = Callable[[FilterSetEvent], None]


class BasicFilters:
    """
    Ordered set of filter terms, unique per (kind, key), compiled by conjunction.
    """

    def __init__(self):
        self._terms: List[Term] = []
        self._listeners: List[FilterSetListener] = []

    # -------------------------
    # subscribers
    # -------------------------
    def subscribe(self, listener: FilterSetListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: FilterSetListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event_type: FilterEventType, term: Optional[Term] = None) -> None:
        if term is None:
            event = FilterSetEvent(event_type=event_type)
        else:
            event = FilterSetEvent(event_type=event_type, kind=term.kind, key=term.key,
                                   values=tuple(term.values))
        for listener in list(self._listeners):
            listener(event)

    # -------------------------
    # mutation
    # -------------------------
    def add_or_update(self, term: Term) -> 'BasicFilters':
        """
        Merge the term into an existing one with the same kind and key,
        otherwise append it.
        """
        for existing in self._terms:
            if existing.kind == term.kind and existing.key == term.key:
                existing.add(term.values)
                logger.debug(f"Merged {term.values} into {existing!r}")
                self._notify(FilterEventType.TERM_MERGED, existing)
                return self

        self._terms.append(term)
        logger.debug(f"Added {term!r}")
        self._notify(FilterEventType.TERM_ADDED, term)
        return self

    def add_prop_eq(self, key: str, value: str, display_key: Optional[str] = None) -> 'BasicFilters':
        return self.add_or_update(Term(ComparisonKind.EQUALS, value, key, display_key))

    def add_prop_like(self, key: str, value: str, display_key: Optional[str] = None) -> 'BasicFilters':
        return self.add_or_update(Term(ComparisonKind.MATCHES, value, key, display_key))

    def set_all_like(self, value: str) -> 'BasicFilters':
        return self.add_or_update(Term(ComparisonKind.MATCHES, value))

    def add_from_string(self, text: str) -> 'BasicFilters':
        return self.add_or_update(Term.from_string(text))

    def remove(self, key: str, kind: ComparisonKind) -> 'BasicFilters':
        """Drop the term with exactly this key and kind, if there is one."""
        try:
            kind = ComparisonKind(kind)
        except ValueError as e:
            raise InvalidTermError(f"{AppMessage.UNKNOWN_KIND}: {kind!r}") from e
        removed = [t for t in self._terms if t.key == key and t.kind == kind]
        if not removed:
            logger.debug(f"No {kind.value} term for key {key!r} to remove")
            return self

        self._terms = [t for t in self._terms if not (t.key == key and t.kind == kind)]
        logger.debug(f"Removed {removed[0]!r}")
        self._notify(FilterEventType.TERM_REMOVED, removed[0])
        return self

    def clear(self) -> 'BasicFilters':
        if self._terms:
            self._terms = []
            self._notify(FilterEventType.CLEARED)
        return self

    # -------------------------
    # read only views
    # -------------------------
    @property
    def terms(self) -> Tuple[TermPayload, ...]:
        return tuple(term.to_payload() for term in self._terms)

    def to_strings(self) -> List[str]:
        return [term.to_string() for term in self._terms]

    def __len__(self) -> int:
        return len(self._terms)

    # -------------------------
    # compilation
    # -------------------------
    def create_json_path(self) -> Optional[str]:
        """
        Compile all terms into one JSONPath filter predicate.

        Returns None when there is nothing to filter on. A single term is
        emitted as is, several terms are each parenthesized and joined with &&.
        """
        clauses = [term.to_json_path() for term in self._terms]
        if not clauses:
            return None

        if len(clauses) == 1:
            expression = clauses[0]
        else:
            expression = AppConstants.AND.join(f"({clause})" for clause in clauses)

        json_path = f"{AppConstants.JSON_PATH_ROOT}[?({expression})]"
        logger.debug(f"Compiled {len(clauses)} term(s) to {json_path}")
        return json_path
