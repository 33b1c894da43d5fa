"""
Service de documentos do usuário (salvar, listar, favoritar, mover para lixeira)
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.config import settings
from app.exceptions import NotFoundError
from app.models.user_document import UserDocument
from app.schemas.user_document import UserDocumentCreate, UserDocumentPatch, UserDocumentsQuery
from app.services.access import ensure_template_access
from app.services.catalog_service import CatalogService
from app.services.user_service import UserService
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, document_id: int) -> Optional[UserDocument]:
        return self.db.query(UserDocument).filter(UserDocument.id == document_id).first()

    def create_document(self, data: UserDocumentCreate) -> UserDocument:
        """
        Salva um documento do usuário.

        Raises:
            NotFoundError: usuário ou template (quando informado) não existe
            ForbiddenError: template premium sem acesso, se ENFORCE_PREMIUM_ACCESS
        """
        user = UserService(self.db).get_by_id(data.user_id)
        if not user:
            raise NotFoundError(f"User with id {data.user_id} not found")

        if data.template_id is not None:
            template = CatalogService(self.db).get_template_by_id(data.template_id)
            if not template:
                raise NotFoundError(f"Template with id {data.template_id} not found")
            if settings.ENFORCE_PREMIUM_ACCESS:
                ensure_template_access(self.db, user, template)

        document = UserDocument(
            user_id=data.user_id,
            template_id=data.template_id,
            title=data.title,
            document_data=data.document_data,
            file_url=None,  # upload de arquivos não é persistido
            file_type=data.file_type,
            status=data.status or "draft",
            is_favorite=False,
        )
        self.db.add(document)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"User document creation failed: {e}", exc_info=True)
            raise

        self.db.refresh(document)
        logger.info(
            f"User document created: id={document.id}, user_id={document.user_id}, "
            f"template_id={document.template_id}, status={document.status}"
        )
        return document

    def get_documents(self, query: UserDocumentsQuery) -> List[UserDocument]:
        """Documentos do usuário filtrados por status e/ou favorito (AND)"""
        q = self.db.query(UserDocument).filter(UserDocument.user_id == query.user_id)

        if query.status is not None:
            q = q.filter(UserDocument.status == query.status)

        if query.is_favorite is not None:
            q = q.filter(UserDocument.is_favorite == query.is_favorite)

        return q.order_by(UserDocument.id.asc()).offset(query.offset).limit(query.limit).all()

    def update_document(self, patch: UserDocumentPatch) -> Optional[UserDocument]:
        """
        Aplica somente os campos enviados e sempre atualiza updated_at.
        Retorna None se o documento não existir.
        """
        document = self.get_by_id(patch.id)
        if not document:
            logger.warning(f"User document not found for update: {patch.id}")
            return None

        changes = patch.changes()
        for field, value in changes.items():
            setattr(document, field, value)
        document.updated_at = utcnow()

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"User document update failed: {e}", exc_info=True)
            raise

        self.db.refresh(document)
        logger.info(f"User document {document.id} updated: fields={sorted(changes)}")
        return document
