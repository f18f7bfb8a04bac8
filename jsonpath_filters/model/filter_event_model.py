from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from jsonpath_filters.constants.event_type import FilterEventType
from jsonpath_filters.model.term_model import ComparisonKind


class FilterSetEvent(BaseModel):
    """Raised to subscribers after a filter set changed"""
    model_config = ConfigDict(frozen=True)

    event_type: FilterEventType
    kind: Optional[ComparisonKind] = None
    key: Optional[str] = None
    values: Tuple[str, ...] = ()
