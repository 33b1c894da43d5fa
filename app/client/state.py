"""
Máquina de estados das telas do cliente (landing, templates, editor, dashboard).

transition() é pura: recebe o estado atual e um evento e devolve um novo
AppState, ou levanta InvalidTransition quando o evento não é aceito na tela
atual.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union
from app.schemas.template import TemplateCategoryResponse, TemplateResponse
from app.schemas.user import UserResponse
from app.schemas.user_document import UserDocumentResponse


class View(str, Enum):
    LANDING = "landing"
    TEMPLATES = "templates"
    EDITOR = "editor"
    DASHBOARD = "dashboard"


class Modal(str, Enum):
    NONE = "none"
    AUTH = "auth"
    SUBSCRIPTION = "subscription"


@dataclass(frozen=True)
class AppState:
    view: View = View.LANDING
    modal: Modal = Modal.NONE
    user: Optional[UserResponse] = None
    selected_category: Optional[TemplateCategoryResponse] = None
    selected_template: Optional[TemplateResponse] = None
    current_document: Optional[UserDocumentResponse] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


# Eventos

@dataclass(frozen=True)
class StartCreating:
    pass


@dataclass(frozen=True)
class CategorySelected:
    category: TemplateCategoryResponse


@dataclass(frozen=True)
class TemplateSelected:
    template: TemplateResponse


@dataclass(frozen=True)
class Navigate:
    view: View


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class DocumentSaved:
    document: UserDocumentResponse


@dataclass(frozen=True)
class LoggedIn:
    user: UserResponse


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class UserUpdated:
    user: UserResponse


@dataclass(frozen=True)
class AuthRequired:
    pass


@dataclass(frozen=True)
class SubscriptionRequired:
    pass


@dataclass(frozen=True)
class ModalClosed:
    pass


Event = Union[
    StartCreating,
    CategorySelected,
    TemplateSelected,
    Navigate,
    Back,
    DocumentSaved,
    LoggedIn,
    LoggedOut,
    UserUpdated,
    AuthRequired,
    SubscriptionRequired,
    ModalClosed,
]


class InvalidTransition(Exception):
    def __init__(self, state: AppState, event):
        super().__init__(f"{type(event).__name__} is not allowed in view '{state.view.value}'")
        self.state = state
        self.event = event


# Telas de origem aceitas por evento de navegação
_ALLOWED_FROM = {
    StartCreating: {View.LANDING},
    CategorySelected: {View.LANDING, View.TEMPLATES},
    TemplateSelected: {View.TEMPLATES},
    DocumentSaved: {View.EDITOR},
}

_BACK_TARGETS = {
    View.EDITOR: View.TEMPLATES,
    View.TEMPLATES: View.LANDING,
}


def transition(state: AppState, event: Event) -> AppState:
    allowed = _ALLOWED_FROM.get(type(event))
    if allowed is not None and state.view not in allowed:
        raise InvalidTransition(state, event)

    if isinstance(event, StartCreating):
        return replace(state, view=View.TEMPLATES)

    if isinstance(event, CategorySelected):
        return replace(state, view=View.TEMPLATES, selected_category=event.category)

    if isinstance(event, TemplateSelected):
        return replace(state, view=View.EDITOR, selected_template=event.template)

    if isinstance(event, DocumentSaved):
        return replace(state, view=View.DASHBOARD, current_document=event.document)

    if isinstance(event, Back):
        target = _BACK_TARGETS.get(state.view)
        if target is None:
            raise InvalidTransition(state, event)
        return replace(state, view=target)

    if isinstance(event, Navigate):
        if event.view == View.DASHBOARD and not state.is_authenticated:
            return replace(state, modal=Modal.AUTH)
        if event.view == View.EDITOR and state.selected_template is None:
            raise InvalidTransition(state, event)
        return replace(state, view=event.view)

    if isinstance(event, LoggedIn):
        return replace(state, user=event.user, modal=Modal.NONE)

    if isinstance(event, LoggedOut):
        return replace(state, view=View.LANDING, modal=Modal.NONE, user=None, current_document=None)

    if isinstance(event, UserUpdated):
        modal = Modal.NONE if state.modal == Modal.SUBSCRIPTION else state.modal
        return replace(state, user=event.user, modal=modal)

    if isinstance(event, AuthRequired):
        return replace(state, modal=Modal.AUTH)

    if isinstance(event, SubscriptionRequired):
        # sem usuário não há assinatura possível: pede login primeiro
        return replace(state, modal=Modal.SUBSCRIPTION if state.is_authenticated else Modal.AUTH)

    if isinstance(event, ModalClosed):
        return replace(state, modal=Modal.NONE)

    raise InvalidTransition(state, event)
