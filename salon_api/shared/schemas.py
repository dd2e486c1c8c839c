"""Base schema shared by every domain - camelCase on the wire, snake_case in Python"""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def column_values(self, exclude_unset: bool = True, **dump_kwargs) -> dict[str, Any]:
        """Field values keyed by attribute name, with enum members reduced to their stored value"""
        data = self.model_dump(exclude_unset=exclude_unset, **dump_kwargs)
        return {key: value.value if isinstance(value, enum.Enum) else value for key, value in data.items()}


class MessageResponse(CamelModel):
    message: str
