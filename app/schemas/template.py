"""
Schemas Pydantic do catálogo de templates
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional
from decimal import Decimal
from datetime import datetime


class TemplateCategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    icon_url: Optional[str] = None
    sort_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TemplatesByCategoryQuery(BaseModel):
    category_id: int
    limit: int = Field(20, ge=1)
    offset: int = Field(0, ge=0)


class TemplateByIdQuery(BaseModel):
    id: int


class TemplateResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    category_id: int
    template_data: Dict[str, Any]
    preview_url: Optional[str] = None
    is_premium: bool
    price: Optional[float] = None
    downloads_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("price", mode="before")
    @classmethod
    def decimal_to_float(cls, value):
        # Numeric(10, 2) volta do banco como Decimal
        if isinstance(value, Decimal):
            return float(value)
        return value
