from app.schemas.common import HealthcheckResponse, FieldPatch
from app.schemas.user import UserCreate, UserPatch, UserResponse
from app.schemas.template import (
    TemplateCategoryResponse,
    TemplatesByCategoryQuery,
    TemplateByIdQuery,
    TemplateResponse,
)
from app.schemas.user_document import (
    UserDocumentCreate,
    UserDocumentPatch,
    UserDocumentsQuery,
    UserDocumentResponse,
)
from app.schemas.purchase import PurchaseCreate, PurchaseResponse

__all__ = [
    "HealthcheckResponse",
    "FieldPatch",
    "UserCreate",
    "UserPatch",
    "UserResponse",
    "TemplateCategoryResponse",
    "TemplatesByCategoryQuery",
    "TemplateByIdQuery",
    "TemplateResponse",
    "UserDocumentCreate",
    "UserDocumentPatch",
    "UserDocumentsQuery",
    "UserDocumentResponse",
    "PurchaseCreate",
    "PurchaseResponse",
]
