from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional
from decimal import Decimal
from datetime import datetime

PurchaseType = Literal["subscription", "individual_document"]
PaymentStatus = Literal["pending", "completed", "failed", "refunded"]


class PurchaseCreate(BaseModel):
    user_id: int
    template_id: Optional[int] = None
    purchase_type: PurchaseType
    # Numeric(10, 2): valores com mais de 2 casas decimais são rejeitados
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    currency: str = Field(..., min_length=1, max_length=10)
    payment_provider: Optional[str] = Field(default=None, max_length=50)
    payment_provider_id: Optional[str] = Field(default=None, max_length=255)


class PurchaseResponse(BaseModel):
    id: int
    user_id: int
    template_id: Optional[int] = None
    purchase_type: PurchaseType
    amount: float
    currency: str
    payment_status: PaymentStatus
    payment_provider: Optional[str] = None
    payment_provider_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("amount", mode="before")
    @classmethod
    def decimal_to_float(cls, value):
        if isinstance(value, Decimal):
            return float(value)
        return value
