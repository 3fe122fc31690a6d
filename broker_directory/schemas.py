from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ProviderOut(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    specialties: Optional[List[str]] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    description: Optional[str] = None
    social_media: Optional[dict] = None
    business_hours: Optional[dict] = None
    license_number: Optional[str] = None
    years_experience: Optional[int] = None
    company_size: Optional[str] = None
    verified: Optional[bool] = None
    source_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SearchRequest(BaseModel):
    # raw values on purpose: the sanitizer turns anything unusable into "no filter"
    search_term: Any = Field(default=None, alias="searchTerm")
    specialty: Any = None
    region: Any = None

    class Config:
        populate_by_name = True


class SearchResponse(BaseModel):
    data: List[ProviderOut]
    count: int


class FilterOptions(BaseModel):
    specialties: List[str]
    neighborhoods: List[str]


class HealthOut(BaseModel):
    status: str
    timestamp: str
    version: str
