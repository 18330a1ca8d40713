"""
Shared Pydantic base for marketplace models.

Records are stored and returned with camelCase attribute names, while Python
code uses snake_case field names.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


class CamelModel(BaseModel):
    """Base model serializing to camelCase attribute names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_record(self) -> Dict[str, Any]:
        """Convert the model to a dictionary for storage and responses."""
        return self.model_dump(mode='json', by_alias=True)
