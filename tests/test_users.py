"""
Testes das procedures de usuário (createUser, updateUserSubscription)
"""
from datetime import datetime, timedelta, timezone
import pytest
from app.models.user import User
from app.rpc.client import RpcError
from app.utils.dates import as_utc


def test_create_user_with_trial(rpc):
    """Novo usuário é free com 7 dias de trial"""
    before = datetime.now(timezone.utc)
    user = rpc.create_user(email="ana@example.com", name="Ana")

    assert user.id > 0
    assert user.email == "ana@example.com"
    assert user.name == "Ana"
    assert user.subscription_type == "free"
    assert user.subscription_expires_at is None
    assert user.avatar_url is None

    trial_ends_at = as_utc(user.trial_ends_at)
    assert before + timedelta(days=7) - timedelta(minutes=1) <= trial_ends_at
    assert trial_ends_at <= datetime.now(timezone.utc) + timedelta(days=7, minutes=1)


def test_create_user_with_premium_subscription(rpc):
    user = rpc.create_user(email="vip@example.com", name="Vip", subscription_type="premium")
    assert user.subscription_type == "premium"
    assert user.trial_ends_at is not None


def test_create_user_duplicate_email(rpc, test_user, db_session):
    """Email repetido retorna 409 CONFLICT"""
    with pytest.raises(RpcError) as exc_info:
        rpc.create_user(email=test_user.email, name="Outra pessoa")

    assert exc_info.value.code == "CONFLICT"
    assert exc_info.value.status_code == 409
    assert "already exists" in exc_info.value.message
    assert db_session.query(User).filter(User.email == test_user.email).count() == 1
    assert db_session.query(User).count() == 1


def test_create_user_invalid_email(client):
    """Email inválido é rejeitado antes do handler"""
    response = client.post("/rpc/createUser", json={"email": "not-an-email", "name": "X"})

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "BAD_REQUEST"
    assert body["errors"][0]["loc"][-1] == "email"


def test_create_user_missing_name(client):
    response = client.post("/rpc/createUser", json={"email": "a@example.com"})
    assert response.status_code == 422


def test_update_subscription_to_premium(rpc, test_user):
    expires = datetime(2030, 1, 1, tzinfo=timezone.utc)
    updated = rpc.update_user_subscription(
        test_user.id,
        subscription_type="premium",
        subscription_expires_at=expires,
    )

    assert updated.subscription_type == "premium"
    assert as_utc(updated.subscription_expires_at) == expires
    # campos não enviados continuam iguais
    assert updated.name == test_user.name
    assert updated.email == test_user.email
    assert updated.trial_ends_at == test_user.trial_ends_at
    assert updated.updated_at > test_user.updated_at


def test_update_user_only_changes_sent_fields(rpc, test_user):
    updated = rpc.update_user_subscription(test_user.id, name="Novo Nome")

    assert updated.name == "Novo Nome"
    assert updated.subscription_type == "free"
    assert updated.avatar_url is None


def test_update_user_clears_nullable_field(rpc):
    user = rpc.create_user(email="avatar@example.com", name="Avatar", avatar_url="https://cdn.example.com/a.png")
    updated = rpc.update_user_subscription(user.id, avatar_url=None)
    assert updated.avatar_url is None


def test_update_user_rejects_null_for_required_field(client, test_user):
    response = client.post("/rpc/updateUserSubscription", json={"id": test_user.id, "name": None})
    assert response.status_code == 422
    assert response.json()["code"] == "BAD_REQUEST"


def test_update_unknown_user_returns_null(rpc):
    """Usuário inexistente: resposta null, sem erro"""
    assert rpc.update_user_subscription(999999, subscription_type="premium") is None


def test_update_user_email_conflict(rpc, test_user):
    other = rpc.create_user(email="other@example.com", name="Other")
    with pytest.raises(RpcError) as exc_info:
        rpc.update_user_subscription(other.id, email=test_user.email)
    assert exc_info.value.status_code == 409
