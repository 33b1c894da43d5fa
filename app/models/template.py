from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Numeric, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, false
from app.database import Base


class Template(Base):
    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey("template_categories.id"), nullable=False, index=True)
    # estrutura do formulário: {"fields": [{"id", "label", "type", "required", "step"}], ...}
    template_data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    preview_url = Column(String(1024), nullable=True)
    is_premium = Column(Boolean, default=False, server_default=false(), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=True)  # obrigatório para premium por convenção, não validado
    downloads_count = Column(Integer, default=0, server_default="0", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    category = relationship("TemplateCategory", back_populates="templates")
    user_documents = relationship("UserDocument", back_populates="template")
    purchases = relationship("Purchase", back_populates="template")
