from enum import Enum
from typing import Optional, Tuple, Dict, Any

from pydantic import BaseModel, ConfigDict, Field

from jsonpath_filters.constants.app_constants import AppConstants


class ComparisonKind(str, Enum):
    """How a term compares its values against a document"""
    EQUALS = "EQUALS"
    MATCHES = "MATCHES"


class TermPayload(BaseModel):
    """Serialized form of a single filter term"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: ComparisonKind
    values: Tuple[str, ...] = Field(..., min_length=1)
    key: str
    display_key: Optional[str] = Field(default=None, alias=AppConstants.displayKey)

    def toItem(self) -> Dict[str, Any]:
        """Converts the payload to a json friendly dict"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def toEntity(cls, item: Dict[str, Any]) -> 'TermPayload':
        """Builds a payload from a dict"""
        return cls.model_validate(item)
