from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import ClassVar, FrozenSet, Literal, Optional
from datetime import datetime
from app.schemas.common import FieldPatch

SubscriptionType = Literal["free", "premium"]


class UserBase(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)


class UserCreate(UserBase):
    avatar_url: Optional[str] = Field(default=None, max_length=1024)
    subscription_type: Optional[SubscriptionType] = None


class UserPatch(FieldPatch):
    """Input de updateUserSubscription: id + campos opcionais do usuário"""

    non_nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"email", "name", "subscription_type"})

    id: int
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=1024)
    subscription_type: Optional[SubscriptionType] = None
    subscription_expires_at: Optional[datetime] = None
    trial_ends_at: Optional[datetime] = None


class UserResponse(UserBase):
    id: int
    avatar_url: Optional[str] = None
    subscription_type: SubscriptionType
    subscription_expires_at: Optional[datetime] = None
    trial_ends_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
