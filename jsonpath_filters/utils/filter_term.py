import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from jsonpath_filters.constants.app_constants import AppConstants
from jsonpath_filters.constants.app_message import AppMessage
from jsonpath_filters.dependencies.settings_provider import is_strict_terms
from jsonpath_filters.model.term_model import ComparisonKind, TermPayload

logger = logging.getLogger(__name__)


class FilterTermError(Exception):
    pass


class FilterParseError(FilterTermError):
    pass


class InvalidTermError(FilterTermError, ValueError):
    pass


class Term:
    """
    One filter constraint: a comparison kind, a key and the values it accepts.

    Values are OR'ed together. The key '@' stands for the whole document and is
    only meaningful for MATCHES terms.
    """

    # key is everything up to the first separator, value is the rest
    TERM_PATTERN = re.compile(r"^([^:~]+)([:~]?)(.*)$")
    WHITESPACE_PATTERN = re.compile(r"\s+")

    def __init__(self, kind: ComparisonKind, value: str,
                 key: str = AppConstants.WHOLE_DOCUMENT_KEY,
                 display_key: Optional[str] = None):
        try:
            kind = ComparisonKind(kind)
        except ValueError as e:
            raise InvalidTermError(f"{AppMessage.UNKNOWN_KIND}: {kind!r}") from e
        if key == AppConstants.WHOLE_DOCUMENT_KEY and kind != ComparisonKind.MATCHES:
            if is_strict_terms():
                raise InvalidTermError(AppMessage.WHOLE_DOCUMENT_REQUIRES_MATCHES)
            logger.warning(f"{AppMessage.WHOLE_DOCUMENT_REQUIRES_MATCHES}, got {kind.value} for {value!r}")

        self.kind = kind
        self.key = key
        self.display_key = display_key
        self.values: List[str] = [value]

    def add(self, new_values: Sequence[str]) -> None:
        """Merge values into the term, new values first, duplicates dropped."""
        self.values = list(dict.fromkeys([*new_values, *self.values]))

    @property
    def is_whole_document(self) -> bool:
        return self.key == AppConstants.WHOLE_DOCUMENT_KEY

    # -------------------------
    # json path compilation
    # -------------------------
    @staticmethod
    def _escape_regex(value: str) -> str:
        # values end up inside a /.../ regex literal
        return value.replace('/', '\\/')

    def to_json_path(self) -> str:
        """
        Compile the term to a JSONPath boolean expression, without wrapping parens.

        EQUALS              -> @.key=="v1"||@.key=="v2"
        MATCHES on a key    -> /v1/.test(@.key)||/v2/.test(@.key)
        MATCHES on '@'      -> /v1/.test(JSON.stringify(@))
        """
        if self.kind == ComparisonKind.EQUALS:
            return AppConstants.OR.join(f'@.{self.key}=="{v}"' for v in self.values)
        elif self.kind == ComparisonKind.MATCHES:
            if self.is_whole_document:
                return f"/{self._escape_regex(self.values[0])}/.test(JSON.stringify(@))"
            return AppConstants.OR.join(f"/{self._escape_regex(v)}/.test(@.{self.key})" for v in self.values)
        else:
            raise InvalidTermError(f"{AppMessage.UNKNOWN_KIND}: {self.kind!r}")

    # -------------------------
    # compact string form
    # -------------------------
    @staticmethod
    def from_string(text: str) -> 'Term':
        """
        Parse 'key:value' (EQUALS), 'key~value' (MATCHES) or bare text
        (MATCHES against the whole document). All whitespace is dropped first.
        """
        compact = Term.WHITESPACE_PATTERN.sub('', text or '')
        if not compact:
            raise FilterParseError(AppMessage.EMPTY_FILTER_STRING)

        match = Term.TERM_PATTERN.match(compact)
        if match is None:
            raise FilterParseError(f"{AppMessage.MALFORMED_FILTER_STRING}: {text!r}")

        key, separator, value = match.groups()
        if separator == AppConstants.EQUALS_SEPARATOR:
            return Term(ComparisonKind.EQUALS, value, key)
        if separator == AppConstants.MATCHES_SEPARATOR:
            return Term(ComparisonKind.MATCHES, value, key)
        return Term(ComparisonKind.MATCHES, key)

    def to_string(self) -> str:
        """Inverse of from_string for single value terms."""
        label = self.display_key or self.key
        joined = AppConstants.VALUE_SEPARATOR.join(self.values).replace('\\', '')
        if self.kind == ComparisonKind.EQUALS:
            return f"{label}{AppConstants.EQUALS_SEPARATOR}{joined}"
        elif self.kind == ComparisonKind.MATCHES:
            if self.is_whole_document:
                return self.values[0]
            return f"{label}{AppConstants.MATCHES_SEPARATOR}{joined}"
        else:
            raise InvalidTermError(f"{AppMessage.UNKNOWN_KIND}: {self.kind!r}")

    # -------------------------
    # serialized form
    # -------------------------
    @staticmethod
    def from_json(payload: Union[str, Dict[str, Any], TermPayload]) -> 'Term':
        """
        Rebuild a term from its serialized form.
        payload can be a TermPayload, a dict or a JSON string, and must carry
        exactly one value.
        """
        if not isinstance(payload, TermPayload):
            try:
                item = json.loads(payload) if isinstance(payload, str) else payload
                payload = TermPayload.toEntity(item)
            except (ValueError, ValidationError) as e:
                logger.error(f"Error reading term payload: {str(e)}")
                raise InvalidTermError(f"{AppMessage.INVALID_PAYLOAD}: {e}") from e

        if len(payload.values) != 1:
            raise InvalidTermError(f"{AppMessage.SINGLE_VALUE_PAYLOAD}, got {len(payload.values)}")

        return Term(payload.kind, payload.values[0], payload.key, payload.display_key)

    def to_payload(self) -> TermPayload:
        return TermPayload(kind=self.kind, values=tuple(self.values), key=self.key,
                           display_key=self.display_key)

    def to_json(self) -> Dict[str, Any]:
        return self.to_payload().toItem()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Term(kind={self.kind.value}, key={self.key!r}, values={self.values!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Term):
            return NotImplemented
        return (self.kind, self.key, self.values) == (other.kind, other.key, other.values)

    # terms are mutable
    __hash__ = None
