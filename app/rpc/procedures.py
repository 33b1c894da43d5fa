"""
Procedures expostas pela API.

Queries: GET {RPC_PREFIX}/<nome> com input em query params.
Mutations: POST {RPC_PREFIX}/<nome> com input em JSON.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from app.rpc.registry import ProcedureRegistry
from app.schemas.common import HealthcheckResponse
from app.schemas.purchase import PurchaseCreate, PurchaseResponse
from app.schemas.template import (
    TemplateByIdQuery,
    TemplateCategoryResponse,
    TemplateResponse,
    TemplatesByCategoryQuery,
)
from app.schemas.user import UserCreate, UserPatch, UserResponse
from app.schemas.user_document import (
    UserDocumentCreate,
    UserDocumentPatch,
    UserDocumentResponse,
    UserDocumentsQuery,
)
from app.services.catalog_service import CatalogService
from app.services.document_service import DocumentService
from app.services.purchase_service import PurchaseService
from app.services.user_service import UserService
from app.utils.dates import utcnow

registry = ProcedureRegistry()


@registry.query("healthcheck", output=HealthcheckResponse, uses_db=False)
def healthcheck():
    """Status do servidor"""
    return {"status": "ok", "timestamp": utcnow()}


# User management

@registry.mutation("createUser", input_model=UserCreate, output=UserResponse)
def create_user(db: Session, data: UserCreate):
    """Cadastra um usuário com 7 dias de trial"""
    return UserService(db).create_user(data)


@registry.mutation("updateUserSubscription", input_model=UserPatch, output=Optional[UserResponse])
def update_user_subscription(db: Session, data: UserPatch):
    """Atualiza campos do usuário; null se o usuário não existir"""
    return UserService(db).update_user(data)


# Template operations

@registry.query("getTemplateCategories", output=List[TemplateCategoryResponse])
def get_template_categories(db: Session):
    """Categorias ordenadas por sort_order"""
    return CatalogService(db).get_categories()


@registry.query("getTemplatesByCategory", input_model=TemplatesByCategoryQuery, output=List[TemplateResponse])
def get_templates_by_category(db: Session, data: TemplatesByCategoryQuery):
    """Templates de uma categoria (paginação por offset)"""
    return CatalogService(db).get_templates_by_category(data.category_id, limit=data.limit, offset=data.offset)


@registry.query("getTemplateById", input_model=TemplateByIdQuery, output=Optional[TemplateResponse])
def get_template_by_id(db: Session, data: TemplateByIdQuery):
    """Template por ID; null se não existir"""
    return CatalogService(db).get_template_by_id(data.id)


# Document management

@registry.mutation("createUserDocument", input_model=UserDocumentCreate, output=UserDocumentResponse)
def create_user_document(db: Session, data: UserDocumentCreate):
    """Salva um documento do usuário"""
    return DocumentService(db).create_document(data)


@registry.query("getUserDocuments", input_model=UserDocumentsQuery, output=List[UserDocumentResponse])
def get_user_documents(db: Session, data: UserDocumentsQuery):
    """Documentos do usuário com filtros opcionais de status e favorito"""
    return DocumentService(db).get_documents(data)


@registry.mutation("updateUserDocument", input_model=UserDocumentPatch, output=Optional[UserDocumentResponse])
def update_user_document(db: Session, data: UserDocumentPatch):
    """Atualiza campos do documento; null se não existir"""
    return DocumentService(db).update_document(data)


# Purchase operations

@registry.mutation("createPurchase", input_model=PurchaseCreate, output=PurchaseResponse)
def create_purchase(db: Session, data: PurchaseCreate):
    """Registra uma compra com status pending"""
    return PurchaseService(db).create_purchase(data)
