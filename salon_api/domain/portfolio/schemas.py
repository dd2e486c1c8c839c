"""Portfolio domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...models_engagement import PortfolioCategory
from ...shared.schemas import CamelModel
from ...utils.sanitization import validate_and_sanitize_input


class PortfolioCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: PortfolioCategory
    staff_id: Optional[int] = None
    service_id: Optional[int] = None
    before_image: Optional[str] = Field(default=None, max_length=500)
    after_image: str = Field(min_length=1, max_length=500)
    tags: Optional[list[str]] = None
    is_featured: bool = False
    is_visible: bool = True
    sort_order: int = 0

    @field_validator("title", "description")
    @classmethod
    def sanitize_text(cls, v):
        return validate_and_sanitize_input(v, max_length=2000)


class PortfolioUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[PortfolioCategory] = None
    before_image: Optional[str] = Field(default=None, max_length=500)
    after_image: Optional[str] = Field(default=None, min_length=1, max_length=500)
    tags: Optional[list[str]] = None
    is_featured: Optional[bool] = None
    is_visible: Optional[bool] = None
    sort_order: Optional[int] = None

    @field_validator("title", "description")
    @classmethod
    def sanitize_text(cls, v):
        return validate_and_sanitize_input(v, max_length=2000)


class PortfolioResponse(CamelModel):
    id: int
    salon_id: int
    staff_id: Optional[int] = None
    service_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    category: PortfolioCategory
    before_image: Optional[str] = None
    after_image: str
    tags: Optional[list[str]] = None
    is_featured: bool
    is_visible: bool
    view_count: int
    like_count: int
    share_count: int
    sort_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
