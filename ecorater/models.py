# ecorater/models.py
from typing import List, Optional

from pydantic import BaseModel, Field

PRODUCT_FIELDS = ("title", "brand", "features", "material")


class ProductQuery(BaseModel):
    title: Optional[str] = None
    brand: Optional[str] = None
    features: Optional[str] = None
    material: Optional[str] = None

    def provided(self) -> dict:
        """Non-blank fields, in prompt order."""
        out = {}
        for name in PRODUCT_FIELDS:
            value = getattr(self, name)
            if value is not None and str(value).strip():
                out[name] = str(value).strip()
        return out

    def missing(self, required) -> List[str]:
        have = self.provided()
        return [f for f in required if f not in have]


class ExtractedRating(BaseModel):
    rating: Optional[int] = None
    description: str = ""
    category: Optional[str] = None


class ExtractedIdentity(BaseModel):
    brand: str
    product: str
    details: str


class SearchItem(BaseModel):
    title: str = ""
    link: str
    thumbnail: Optional[str] = None


class SearchRequest(BaseModel):
    query: str
    num: int = Field(10, ge=1, le=10)


class IdentifyRequest(BaseModel):
    image_url: Optional[str] = None
    image_base64: Optional[str] = None
    mime_type: str = "image/jpeg"
    search: bool = False

    def has_one_image(self) -> bool:
        """Exactly one of image_url / image_base64 is non-blank."""
        has_url = bool(self.image_url and self.image_url.strip())
        has_data = bool(self.image_base64 and self.image_base64.strip())
        return has_url != has_data

    def as_url(self) -> str:
        if self.image_url and self.image_url.strip():
            return self.image_url.strip()
        return f"data:{self.mime_type};base64,{(self.image_base64 or '').strip()}"


class RawResponse(BaseModel):
    response: str


class RatingResponse(ExtractedRating):
    response: str


class IdentifyResponse(ExtractedIdentity):
    response: str
    results: Optional[List[SearchItem]] = None


class SearchResponse(BaseModel):
    items: List[SearchItem]
