"""
Schemas Pydantic para documentos do usuário
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, ClassVar, Dict, FrozenSet, Literal, Optional
from datetime import datetime
from app.schemas.common import FieldPatch

DocumentStatus = Literal["draft", "completed", "trashed"]
FileType = Literal["pdf", "doc", "docx"]


class UserDocumentCreate(BaseModel):
    user_id: int
    template_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=255)
    document_data: Dict[str, Any]
    file_type: Optional[FileType] = None
    status: Optional[DocumentStatus] = None


class UserDocumentPatch(FieldPatch):
    """Input de updateUserDocument; mover para lixeira = status "trashed" """

    non_nullable_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"title", "document_data", "status", "is_favorite"}
    )

    id: int
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    document_data: Optional[Dict[str, Any]] = None
    status: Optional[DocumentStatus] = None
    is_favorite: Optional[bool] = None


class UserDocumentsQuery(BaseModel):
    user_id: int
    status: Optional[DocumentStatus] = None
    is_favorite: Optional[bool] = None
    limit: int = Field(50, ge=1)
    offset: int = Field(0, ge=0)


class UserDocumentResponse(BaseModel):
    id: int
    user_id: int
    template_id: Optional[int] = None
    title: str
    document_data: Dict[str, Any]
    file_url: Optional[str] = None
    file_type: Optional[FileType] = None
    status: DocumentStatus
    is_favorite: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
