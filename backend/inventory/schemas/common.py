from decimal import Decimal
from typing import Annotated, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# amounts go out as JSON numbers, not pydantic's default decimal strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    model_config = ConfigDict(populate_by_name=True)

    data: List[T]
    page: int
    page_size: int = Field(serialization_alias="pageSize")
    total: int
    total_pages: int = Field(serialization_alias="totalPages")
