from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FragmentModel(BaseModel):
    """Base for every persisted fragment, part and data value.

    Instances are immutable. Attributes are snake_case in Python and camelCase
    (or an explicit alias) in the persisted record.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_record(self) -> dict[str, Any]:
        """Dump to the persisted record form, omitting absent optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
