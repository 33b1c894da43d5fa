from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, false
from app.database import Base

DOCUMENT_STATUSES = ("draft", "completed", "trashed")
FILE_TYPES = ("pdf", "doc", "docx")


class UserDocument(Base):
    __tablename__ = "user_documents"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("templates.id"), nullable=True, index=True)  # null = upload
    title = Column(String(255), nullable=False)
    document_data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    file_url = Column(String(1024), nullable=True)
    file_type = Column(Enum(*FILE_TYPES, name="file_type"), nullable=True)
    status = Column(
        Enum(*DOCUMENT_STATUSES, name="document_status"),
        nullable=False,
        default="draft",
        server_default="draft",
        index=True,
    )
    is_favorite = Column(Boolean, default=False, server_default=false(), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="documents")
    template = relationship("Template", back_populates="user_documents")
