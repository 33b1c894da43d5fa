"""
Testes de compras (createPurchase)
"""
import pytest
from app.models.purchase import Purchase
from app.models.template import Template
from app.rpc.client import RpcError


def test_subscription_purchase(rpc, test_user, db_session):
    """Compra nasce sempre como pending"""
    purchase = rpc.create_purchase(
        user_id=test_user.id,
        purchase_type="subscription",
        amount=9.95,
        currency="EUR",
    )

    assert purchase.id > 0
    assert purchase.template_id is None
    assert purchase.payment_status == "pending"
    assert purchase.amount == 9.95
    assert purchase.currency == "EUR"

    stored = db_session.query(Purchase).filter(Purchase.id == purchase.id).one()
    assert str(stored.amount) == "9.95"


def test_individual_purchase(rpc, test_user, catalog):
    template = catalog.query(Template).filter(Template.title == "Rental Agreement").one()
    purchase = rpc.create_purchase(
        user_id=test_user.id,
        template_id=template.id,
        purchase_type="individual_document",
        amount=6.95,
        currency="EUR",
        payment_provider="stripe",
        payment_provider_id="pi_123",
    )

    assert purchase.template_id == template.id
    assert purchase.purchase_type == "individual_document"
    assert purchase.payment_provider == "stripe"
    assert purchase.payment_provider_id == "pi_123"


def test_purchase_status_cannot_be_set_by_client(client, test_user):
    response = client.post("/rpc/createPurchase", json={
        "user_id": test_user.id,
        "purchase_type": "subscription",
        "amount": 9.95,
        "currency": "EUR",
        "payment_status": "completed",
    })
    assert response.status_code == 200
    assert response.json()["payment_status"] == "pending"


def test_purchase_unknown_user(rpc, db_session):
    with pytest.raises(RpcError) as exc_info:
        rpc.create_purchase(user_id=999999, purchase_type="subscription", amount=9.95, currency="EUR")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "User not found"


def test_purchase_unknown_template(rpc, test_user):
    with pytest.raises(RpcError) as exc_info:
        rpc.create_purchase(
            user_id=test_user.id,
            template_id=999999,
            purchase_type="individual_document",
            amount=1,
            currency="EUR",
        )
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Template not found"


@pytest.mark.parametrize("amount", [0, -1])
def test_purchase_amount_must_be_positive(client, test_user, amount):
    response = client.post("/rpc/createPurchase", json={
        "user_id": test_user.id,
        "purchase_type": "subscription",
        "amount": amount,
        "currency": "EUR",
    })
    assert response.status_code == 422


def test_purchase_invalid_type(client, test_user):
    response = client.post("/rpc/createPurchase", json={
        "user_id": test_user.id,
        "purchase_type": "lifetime",
        "amount": 10,
        "currency": "EUR",
    })
    assert response.status_code == 422


def test_purchase_amount_with_sub_cent_precision(client, test_user, db_session):
    """Mais de 2 casas decimais é rejeitado, em vez de arredondar para 0.00"""
    response = client.post("/rpc/createPurchase", json={
        "user_id": test_user.id,
        "purchase_type": "subscription",
        "amount": 0.001,
        "currency": "EUR",
    })
    assert response.status_code == 422
    assert db_session.query(Purchase).count() == 0
