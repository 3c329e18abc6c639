"""Base class for DTOs exchanged with the FYLA REST API."""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Unknown keys are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api(self) -> Dict[str, Any]:
        """Serialize for a request body (camelCase keys, unset optionals dropped)."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
