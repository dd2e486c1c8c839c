"""AI try-on schemas - sessions, hairstyles and share links"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ...models_tryon import HairstyleCategory, HairstyleGender, TryOnStatus
from ...shared.schemas import CamelModel


class TryOnCreate(CamelModel):
    # Uploaded image URL or a data: URI
    original_image_url: str = Field(min_length=1)
    hairstyle_id: int


class TryOnSessionResponse(CamelModel):
    id: int
    user_id: int
    original_image_url: str
    result_image_url: Optional[str] = None
    hairstyle_id: int
    hairstyle_name: Optional[str] = None
    status: TryOnStatus
    error_message: Optional[str] = None
    processing_time_ms: Optional[int] = None
    is_saved: bool
    is_shared: bool
    share_token: Optional[str] = None
    generation_metadata: Optional[dict] = None
    view_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SharedTryOnResponse(CamelModel):
    """What an anonymous viewer of a share link sees"""

    id: int
    result_image_url: Optional[str] = None
    hairstyle_id: int
    hairstyle_name: Optional[str] = None
    status: TryOnStatus
    view_count: int
    created_at: Optional[datetime] = None


class ShareResponse(CamelModel):
    share_token: str
    share_url: str


class HairstyleCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: str
    thumbnail_url: Optional[str] = None
    category: HairstyleCategory
    gender: HairstyleGender = HairstyleGender.UNISEX
    tags: Optional[list[str]] = None
    is_featured: bool = False
    is_premium: bool = False
    style_pack: Optional[str] = None
    sort_order: int = 0


class HairstyleResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    image_url: str
    thumbnail_url: Optional[str] = None
    category: HairstyleCategory
    gender: HairstyleGender
    tags: Optional[list[str]] = None
    is_active: bool
    is_featured: bool
    is_premium: bool
    try_on_count: int
    save_count: int
    style_pack: Optional[str] = None
    sort_order: int
    created_at: Optional[datetime] = None
