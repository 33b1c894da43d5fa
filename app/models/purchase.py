from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

PURCHASE_TYPES = ("subscription", "individual_document")
PAYMENT_STATUSES = ("pending", "completed", "failed", "refunded")


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("templates.id"), nullable=True, index=True)  # null para assinatura
    purchase_type = Column(Enum(*PURCHASE_TYPES, name="purchase_type"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(10), nullable=False, default="EUR", server_default="EUR")
    payment_status = Column(
        Enum(*PAYMENT_STATUSES, name="payment_status"),
        nullable=False,
        default="pending",
        server_default="pending",
    )
    payment_provider = Column(String(50), nullable=True)
    payment_provider_id = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="purchases")
    template = relationship("Template", back_populates="purchases")
