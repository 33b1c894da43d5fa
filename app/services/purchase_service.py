"""
Service de compras (assinatura ou documento avulso).

O provedor de pagamento não é integrado: toda compra nasce com
payment_status="pending" e não há webhook que altere esse status.
"""
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.exceptions import NotFoundError
from app.models.purchase import Purchase
from app.schemas.purchase import PurchaseCreate
from app.services.catalog_service import CatalogService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class PurchaseService:
    def __init__(self, db: Session):
        self.db = db

    def create_purchase(self, data: PurchaseCreate) -> Purchase:
        """
        Registra uma intenção de pagamento.

        Raises:
            NotFoundError: usuário ou template (quando informado) não existe
        """
        if not UserService(self.db).get_by_id(data.user_id):
            raise NotFoundError("User not found")

        if data.template_id is not None:
            if not CatalogService(self.db).get_template_by_id(data.template_id):
                raise NotFoundError("Template not found")

        purchase = Purchase(
            user_id=data.user_id,
            template_id=data.template_id,
            purchase_type=data.purchase_type,
            amount=data.amount,
            currency=data.currency,
            payment_status="pending",
            payment_provider=data.payment_provider,
            payment_provider_id=data.payment_provider_id,
        )
        self.db.add(purchase)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Purchase creation failed: {e}", exc_info=True)
            raise

        self.db.refresh(purchase)
        logger.info(
            f"Purchase created: id={purchase.id}, user_id={purchase.user_id}, "
            f"type={purchase.purchase_type}, amount={purchase.amount} {purchase.currency}"
        )
        return purchase
