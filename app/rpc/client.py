"""
Cliente HTTP das procedures RPC.

As respostas são validadas com os mesmos schemas Pydantic usados pelo
servidor, então cliente e servidor compartilham os tipos.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx
from pydantic import TypeAdapter
from pydantic_core import to_jsonable_python
from app.schemas.common import HealthcheckResponse
from app.schemas.purchase import PurchaseResponse
from app.schemas.template import TemplateCategoryResponse, TemplateResponse
from app.schemas.user import UserResponse
from app.schemas.user_document import UserDocumentResponse

logger = logging.getLogger(__name__)

_categories_adapter = TypeAdapter(List[TemplateCategoryResponse])
_templates_adapter = TypeAdapter(List[TemplateResponse])
_documents_adapter = TypeAdapter(List[UserDocumentResponse])


class RpcError(Exception):
    """Falha de uma chamada RPC (erro HTTP da API ou falha de rede)"""

    def __init__(self, code: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    def __repr__(self):
        return f"RpcError(code={self.code!r}, status_code={self.status_code!r}, message={self.message!r})"


class RpcClient:
    def __init__(self, http: httpx.Client, prefix: str = "/rpc"):
        self.http = http
        self.prefix = prefix.rstrip("/")

    def query(self, name: str, **params) -> Any:
        """Chama uma query; parâmetros None não são enviados"""
        params = {key: value for key, value in params.items() if value is not None}
        try:
            response = self.http.get(f"{self.prefix}/{name}", params=params)
        except httpx.HTTPError as e:
            logger.error(f"RPC query {name} failed: {e}")
            raise RpcError("NETWORK_ERROR", str(e)) from e
        return self._handle_response(name, response)

    def mutate(self, name: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """Chama uma mutation; somente as chaves presentes em payload são enviadas"""
        try:
            response = self.http.post(f"{self.prefix}/{name}", json=to_jsonable_python(payload or {}))
        except httpx.HTTPError as e:
            logger.error(f"RPC mutation {name} failed: {e}")
            raise RpcError("NETWORK_ERROR", str(e)) from e
        return self._handle_response(name, response)

    @staticmethod
    def _handle_response(name: str, response: httpx.Response) -> Any:
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        detail = body.get("detail") if isinstance(body, dict) else None
        code = body.get("code") if isinstance(body, dict) else None
        logger.warning(f"RPC {name} returned {response.status_code}: {detail}")
        raise RpcError(
            code or "INTERNAL_SERVER_ERROR",
            detail if isinstance(detail, str) else response.reason_phrase,
            response.status_code,
        )

    # Procedures tipadas

    def healthcheck(self) -> HealthcheckResponse:
        return HealthcheckResponse.model_validate(self.query("healthcheck"))

    def create_user(
        self,
        email: str,
        name: str,
        avatar_url: Optional[str] = None,
        subscription_type: Optional[str] = None,
    ) -> UserResponse:
        payload = {"email": email, "name": name}
        if avatar_url is not None:
            payload["avatar_url"] = avatar_url
        if subscription_type is not None:
            payload["subscription_type"] = subscription_type
        return UserResponse.model_validate(self.mutate("createUser", payload))

    def update_user_subscription(self, id: int, **fields) -> Optional[UserResponse]:
        result = self.mutate("updateUserSubscription", {"id": id, **fields})
        return UserResponse.model_validate(result) if result is not None else None

    def get_template_categories(self) -> List[TemplateCategoryResponse]:
        return _categories_adapter.validate_python(self.query("getTemplateCategories"))

    def get_templates_by_category(
        self,
        category_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[TemplateResponse]:
        result = self.query("getTemplatesByCategory", category_id=category_id, limit=limit, offset=offset)
        return _templates_adapter.validate_python(result)

    def get_template_by_id(self, id: int) -> Optional[TemplateResponse]:
        result = self.query("getTemplateById", id=id)
        return TemplateResponse.model_validate(result) if result is not None else None

    def create_user_document(self, **fields) -> UserDocumentResponse:
        return UserDocumentResponse.model_validate(self.mutate("createUserDocument", fields))

    def get_user_documents(
        self,
        user_id: int,
        status: Optional[str] = None,
        is_favorite: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[UserDocumentResponse]:
        result = self.query(
            "getUserDocuments",
            user_id=user_id,
            status=status,
            is_favorite=is_favorite,
            limit=limit,
            offset=offset,
        )
        return _documents_adapter.validate_python(result)

    def update_user_document(self, id: int, **fields) -> Optional[UserDocumentResponse]:
        result = self.mutate("updateUserDocument", {"id": id, **fields})
        return UserDocumentResponse.model_validate(result) if result is not None else None

    def create_purchase(self, **fields) -> PurchaseResponse:
        return PurchaseResponse.model_validate(self.mutate("createPurchase", fields))
