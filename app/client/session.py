"""
Sessão do cliente: executa as ações das telas chamando as procedures RPC e
alimenta a máquina de estados.

Falhas de carregamento viram Resource com status "error"; nunca são
substituídas por dados de demonstração.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Generic, List, Optional, TypeVar
from app.client.state import (
    AppState,
    AuthRequired,
    CategorySelected,
    DocumentSaved,
    Event,
    LoggedIn,
    LoggedOut,
    Navigate,
    SubscriptionRequired,
    TemplateSelected,
    UserUpdated,
    View,
    transition,
)
from app.client.wizard import FormWizard
from app.config import settings
from app.rpc.client import RpcClient, RpcError
from app.schemas.template import TemplateCategoryResponse, TemplateResponse
from app.schemas.user import UserResponse
from app.schemas.user_document import UserDocumentResponse
from app.services.access import can_use_template, trial_days_remaining
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUBSCRIPTION_PRICE = 9.95
CURRENCY = settings.DEFAULT_CURRENCY
SUBSCRIPTION_PERIOD_DAYS = 30

DUPLICATE_EMAIL_MESSAGE = "An account with this email already exists. Please try signing in instead."
SIGNUP_FAILED_MESSAGE = "Failed to create account. Please try again."


@dataclass
class Resource(Generic[T]):
    """Resultado de um carregamento: loaded, empty ou error"""

    status: str
    items: List[T] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def of(cls, items: List[T]) -> "Resource[T]":
        return cls(status="loaded" if items else "empty", items=list(items))

    @classmethod
    def failed(cls, error: str) -> "Resource[T]":
        return cls(status="error", error=error)


@dataclass
class SaveResult:
    status: str  # saved | auth_required | subscription_required | error
    document: Optional[UserDocumentResponse] = None
    error: Optional[str] = None


def signup_error_message(error: RpcError) -> str:
    if error.code == "CONFLICT" or "already exists" in error.message or "duplicate" in error.message:
        return DUPLICATE_EMAIL_MESSAGE
    return error.message or SIGNUP_FAILED_MESSAGE


def filter_documents(documents: List[UserDocumentResponse], term: str) -> List[UserDocumentResponse]:
    """Busca por título sem diferenciar maiúsculas/minúsculas"""
    needle = term.strip().lower()
    return [doc for doc in documents if needle in doc.title.lower()]


class ClientSession:
    def __init__(self, rpc: RpcClient, clock: Callable[[], datetime] = utcnow):
        self.rpc = rpc
        self.clock = clock
        self.state = AppState()
        self.categories: Resource[TemplateCategoryResponse] = Resource.of([])
        self.templates: Resource[TemplateResponse] = Resource.of([])
        self.documents: Resource[UserDocumentResponse] = Resource.of([])
        self.favorites: Resource[UserDocumentResponse] = Resource.of([])
        self.trashed: Resource[UserDocumentResponse] = Resource.of([])

    def dispatch(self, event: Event) -> AppState:
        self.state = transition(self.state, event)
        return self.state

    @property
    def user(self) -> Optional[UserResponse]:
        return self.state.user

    # Catálogo

    def load_categories(self) -> Resource[TemplateCategoryResponse]:
        try:
            self.categories = Resource.of(self.rpc.get_template_categories())
        except RpcError as e:
            logger.error(f"Failed to load categories: {e.message}")
            self.categories = Resource.failed(e.message)
        return self.categories

    def browse_templates(self) -> AppState:
        return self.dispatch(Navigate(View.TEMPLATES))

    def select_category(self, category: TemplateCategoryResponse) -> Resource[TemplateResponse]:
        self.dispatch(CategorySelected(category))
        return self.load_templates()

    def load_templates(self, limit: Optional[int] = None, offset: Optional[int] = None) -> Resource[TemplateResponse]:
        category = self.state.selected_category
        if category is None:
            self.templates = Resource.of([])
            return self.templates
        try:
            self.templates = Resource.of(self.rpc.get_templates_by_category(category.id, limit=limit, offset=offset))
        except RpcError as e:
            logger.error(f"Failed to load templates for category {category.id}: {e.message}")
            self.templates = Resource.failed(e.message)
        return self.templates

    def select_template(self, template: TemplateResponse) -> FormWizard:
        self.dispatch(TemplateSelected(template))
        return FormWizard(template, today=self.clock().date())

    # Autenticação (somente estado do cliente)

    def sign_up(self, email: str, name: str) -> Optional[str]:
        """Cria a conta e faz login. Retorna a mensagem de erro, ou None em caso de sucesso"""
        try:
            user = self.rpc.create_user(email=email, name=name, subscription_type="free")
        except RpcError as e:
            logger.warning(f"Sign up failed for {email}: {e.message}")
            return signup_error_message(e)
        self.dispatch(LoggedIn(user))
        return None

    def log_in(self, user: UserResponse) -> AppState:
        return self.dispatch(LoggedIn(user))

    def log_out(self) -> AppState:
        return self.dispatch(LoggedOut())

    # Editor

    def can_use_template(self, template: TemplateResponse) -> bool:
        if template.is_premium and self.user is None:
            return False
        return can_use_template(template, self.user, self.clock())

    def save_document(self, wizard: FormWizard, skip_access_check: bool = False) -> SaveResult:
        """
        Salva o documento preenchido como "completed" e vai para o dashboard.

        Sem usuário abre o login; template premium sem acesso abre a assinatura.
        """
        if self.user is None:
            self.dispatch(AuthRequired())
            return SaveResult(status="auth_required")

        template = wizard.template
        if not skip_access_check and not self.can_use_template(template):
            self.dispatch(SubscriptionRequired())
            return SaveResult(status="subscription_required")

        if self.state.view != View.EDITOR:
            return SaveResult(status="error", error="Open a template in the editor before saving")

        try:
            document = self.rpc.create_user_document(
                user_id=self.user.id,
                template_id=template.id,
                title=wizard.title,
                document_data=wizard.document_data(),
                status="completed",
            )
        except RpcError as e:
            logger.error(f"Failed to save document: {e.message}")
            return SaveResult(status="error", error=e.message)

        self.dispatch(DocumentSaved(document))
        return SaveResult(status="saved", document=document)

    def purchase_template(self, wizard: FormWizard) -> SaveResult:
        """Compra avulsa do template e em seguida salva o documento"""
        if self.user is None:
            self.dispatch(AuthRequired())
            return SaveResult(status="auth_required")

        template = wizard.template
        if not template.price:
            return SaveResult(status="error", error="Template is not available for individual purchase")
        if self.state.view != View.EDITOR:
            return SaveResult(status="error", error="Open a template in the editor before purchasing")

        try:
            self.rpc.create_purchase(
                user_id=self.user.id,
                template_id=template.id,
                purchase_type="individual_document",
                amount=template.price,
                currency=CURRENCY,
            )
        except RpcError as e:
            logger.error(f"Purchase failed: {e.message}")
            return SaveResult(status="error", error=e.message)

        return self.save_document(wizard, skip_access_check=True)

    def subscribe(self) -> Optional[UserResponse]:
        """
        Registra a compra da assinatura e torna o usuário premium por
        SUBSCRIPTION_PERIOD_DAYS dias.

        O acesso é liberado sem esperar confirmação do pagamento (a compra fica
        "pending"). Sem usuário logado abre o login e retorna None.
        """
        if self.user is None:
            self.dispatch(AuthRequired())
            return None

        self.rpc.create_purchase(
            user_id=self.user.id,
            purchase_type="subscription",
            amount=SUBSCRIPTION_PRICE,
            currency=CURRENCY,
        )
        updated = self.rpc.update_user_subscription(
            self.user.id,
            subscription_type="premium",
            subscription_expires_at=self.clock() + timedelta(days=SUBSCRIPTION_PERIOD_DAYS),
        )
        if updated is None:
            raise RpcError("NOT_FOUND", f"User with id {self.user.id} not found", 404)
        self.dispatch(UserUpdated(updated))
        return updated

    def trial_days_remaining(self) -> int:
        return trial_days_remaining(self.user, self.clock()) if self.user else 0

    # Dashboard

    def load_dashboard(self) -> dict:
        """Carrega documentos concluídos, favoritos e lixeira"""
        if self.user is None:
            self.dispatch(AuthRequired())
            return {}
        user_id = self.user.id
        self.documents = self._load_documents(user_id, status="completed")
        favorites = self._load_documents(user_id, is_favorite=True)
        if favorites.status != "error":
            # documentos na lixeira não aparecem nos favoritos
            favorites = Resource.of([doc for doc in favorites.items if doc.status != "trashed"])
        self.favorites = favorites
        self.trashed = self._load_documents(user_id, status="trashed")
        return {"documents": self.documents, "favorites": self.favorites, "trashed": self.trashed}

    def _load_documents(self, user_id: int, **filters) -> Resource[UserDocumentResponse]:
        try:
            return Resource.of(self.rpc.get_user_documents(user_id, **filters))
        except RpcError as e:
            logger.error(f"Failed to load documents {filters}: {e.message}")
            return Resource.failed(e.message)

    def toggle_favorite(self, document: UserDocumentResponse) -> Optional[UserDocumentResponse]:
        """Inverte o favorito e atualiza as listas com o registro confirmado pelo servidor"""
        updated = self.rpc.update_user_document(document.id, is_favorite=not document.is_favorite)
        if updated is None:
            self._forget(document.id)
            return None

        self.documents = Resource.of(_replace(self.documents.items, updated))
        self.trashed = Resource.of(_replace(self.trashed.items, updated))
        favorites = [doc for doc in self.favorites.items if doc.id != updated.id]
        if updated.is_favorite and updated.status != "trashed":
            favorites.append(updated)
        self.favorites = Resource.of(favorites)
        return updated

    def move_to_trash(self, document: UserDocumentResponse) -> Optional[UserDocumentResponse]:
        updated = self.rpc.update_user_document(document.id, status="trashed")
        self._forget(document.id)
        if updated is None:
            return None
        self.trashed = Resource.of(self.trashed.items + [updated])
        return updated

    def _forget(self, document_id: int) -> None:
        self.documents = Resource.of([doc for doc in self.documents.items if doc.id != document_id])
        self.favorites = Resource.of([doc for doc in self.favorites.items if doc.id != document_id])
        self.trashed = Resource.of([doc for doc in self.trashed.items if doc.id != document_id])


def _replace(documents: List[UserDocumentResponse], updated: UserDocumentResponse) -> List[UserDocumentResponse]:
    return [updated if doc.id == updated.id else doc for doc in documents]
