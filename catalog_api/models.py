# catalog_api/models.py
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator,
)

NonNegativePrice = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = ""
    price: Union[StrictInt, StrictFloat]
    category: str
    in_stock: bool = Field(True, alias="inStock")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ProductPayload(BaseModel):
    """Body of a create/update request.

    Fields are declared in the order they are checked; the first failing
    field decides the error message.  ``description`` and ``in_stock``
    stay ``None`` when the caller left them out; create and update apply
    different defaults.  Only the ``inStock`` spelling is read from the
    body.
    """
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    price: NonNegativePrice
    category: StrictStr
    description: Optional[StrictStr] = None
    in_stock: Optional[StrictBool] = Field(None, alias="inStock")

    @field_validator("name", "category")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        # stored untrimmed
        return value
