"""
Testes da camada RPC: registro, rotas, erros e cliente
"""
import httpx
import pytest
from app.rpc.client import RpcClient, RpcError
from app.rpc.procedures import registry
from app.rpc.registry import MUTATION, QUERY, Procedure, ProcedureRegistry

QUERIES = {"healthcheck", "getTemplateCategories", "getTemplatesByCategory", "getTemplateById", "getUserDocuments"}
MUTATIONS = {"createUser", "updateUserSubscription", "createUserDocument", "updateUserDocument", "createPurchase"}


def test_registry_contains_all_procedures():
    assert set(registry.names()) == QUERIES | MUTATIONS
    for name in QUERIES:
        assert registry.get(name).kind == QUERY
    for name in MUTATIONS:
        assert registry.get(name).kind == MUTATION


def test_registry_rejects_duplicates():
    local = ProcedureRegistry()

    @local.query("ping")
    def ping():
        """Ping"""

    assert len(local) == 1
    assert local.get("ping").summary == "Ping"
    with pytest.raises(ValueError):
        local.register(Procedure(name="ping", kind=QUERY, handler=ping, input_model=None, output=None))


def test_registry_rejects_unknown_kind():
    with pytest.raises(ValueError):
        ProcedureRegistry().register(
            Procedure(name="x", kind="subscription", handler=lambda: None, input_model=None, output=None)
        )


def test_healthcheck(rpc):
    result = rpc.healthcheck()
    assert result.status == "ok"
    assert result.timestamp is not None


def test_list_procedures(client):
    """GET /rpc descreve as procedures com os JSON Schemas de entrada e saída"""
    response = client.get("/rpc")
    assert response.status_code == 200

    procedures = {p["name"]: p for p in response.json()["procedures"]}
    assert set(procedures) == QUERIES | MUTATIONS
    create_user = procedures["createUser"]
    assert create_user["kind"] == "mutation"
    assert "email" in create_user["input_schema"]["properties"]
    assert procedures["getTemplateCategories"]["input_schema"] is None
    assert procedures["getTemplateById"]["output_schema"] is not None


def test_query_is_get_and_mutation_is_post(client):
    assert client.post("/rpc/getTemplateCategories").status_code == 405
    assert client.get("/rpc/createUser").status_code == 405


def test_unknown_procedure(client):
    response = client.get("/rpc/doesNotExist")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_request_id_header(client):
    response = client.get("/rpc/healthcheck", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = client.get("/rpc/healthcheck")
    assert response.headers["X-Request-ID"]


def test_error_body_has_request_id(client, db_session):
    response = client.post(
        "/rpc/createPurchase",
        json={"user_id": 1, "purchase_type": "subscription", "amount": 9.95, "currency": "EUR"},
        headers={"X-Request-ID": "req-404"},
    )
    assert response.status_code == 404
    assert response.json() == {"detail": "User not found", "code": "NOT_FOUND", "request_id": "req-404"}


def test_validation_error_raises_bad_request(rpc):
    with pytest.raises(RpcError) as exc_info:
        rpc.get_templates_by_category(1, limit=0)
    assert exc_info.value.code == "BAD_REQUEST"
    assert exc_info.value.status_code == 422


def test_network_error():
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(transport=httpx.MockTransport(fail), base_url="http://api.test")
    rpc = RpcClient(http)

    with pytest.raises(RpcError) as exc_info:
        rpc.get_template_categories()
    assert exc_info.value.code == "NETWORK_ERROR"
    assert exc_info.value.status_code is None


def test_non_json_error_response():
    http = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway")),
        base_url="http://api.test",
    )
    with pytest.raises(RpcError) as exc_info:
        RpcClient(http).healthcheck()
    assert exc_info.value.status_code == 502
    assert exc_info.value.code == "INTERNAL_SERVER_ERROR"
