"""
Regras de acesso a templates premium.

Um template premium pode ser usado quando o usuário é premium ou ainda está
no período de trial. O cliente aplica essas regras antes de salvar; o
servidor só as aplica em createUserDocument quando ENFORCE_PREMIUM_ACCESS
está ligado.
"""
import logging
import math
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.exceptions import ForbiddenError
from app.models.purchase import Purchase
from app.utils.dates import as_utc, utcnow

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

# Enquanto não existir confirmação de pagamento, compras pendentes também liberam o template
ENTITLING_PAYMENT_STATUSES = ("pending", "completed")


def has_premium_access(user, now: Optional[datetime] = None) -> bool:
    """True se o usuário é premium ou o trial ainda não terminou"""
    if user is None:
        return False
    if user.subscription_type == "premium":
        return True
    trial_ends_at = as_utc(user.trial_ends_at)
    return trial_ends_at is not None and trial_ends_at > (now or utcnow())


def can_use_template(template, user, now: Optional[datetime] = None) -> bool:
    """Templates gratuitos são sempre liberados; premium exige usuário com acesso premium"""
    if not template.is_premium:
        return True
    return has_premium_access(user, now)


def trial_days_remaining(user, now: Optional[datetime] = None) -> int:
    """Dias restantes de trial (arredondado para cima, mínimo 0)"""
    trial_ends_at = as_utc(user.trial_ends_at) if user else None
    if trial_ends_at is None:
        return 0
    seconds = (trial_ends_at - (now or utcnow())).total_seconds()
    return max(0, math.ceil(seconds / SECONDS_PER_DAY))


def has_purchased_template(db: Session, user_id: int, template_id: int) -> bool:
    """Verifica se existe compra avulsa do template para o usuário"""
    purchase = db.query(Purchase).filter(
        Purchase.user_id == user_id,
        Purchase.template_id == template_id,
        Purchase.purchase_type == "individual_document",
        Purchase.payment_status.in_(ENTITLING_PAYMENT_STATUSES),
    ).first()
    return purchase is not None


def ensure_template_access(db: Session, user, template, now: Optional[datetime] = None) -> None:
    """
    Levanta ForbiddenError se o usuário não pode usar o template.

    Além de assinatura/trial, aceita uma compra avulsa do template.
    """
    if can_use_template(template, user, now):
        return
    if has_purchased_template(db, user.id, template.id):
        return
    logger.warning(f"Premium template {template.id} denied for user {user.id}")
    raise ForbiddenError(f"Template with id {template.id} requires a premium subscription or purchase")
