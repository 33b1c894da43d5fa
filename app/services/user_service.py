"""
Service de usuários: cadastro com período de trial e atualização de assinatura
"""
import logging
from datetime import timedelta
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.config import settings
from app.exceptions import ConflictError
from app.models.user import User
from app.schemas.user import UserCreate, UserPatch
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retorna um usuário por ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Retorna um usuário por email"""
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, data: UserCreate) -> User:
        """
        Cria um usuário no plano free (ou no plano informado) com trial de
        TRIAL_DAYS dias a partir de agora.

        Raises:
            ConflictError: email já cadastrado
        """
        if self.get_by_email(data.email):
            logger.warning(f"User creation rejected, email already exists: {data.email}")
            raise ConflictError(f"User with email {data.email} already exists")

        user = User(
            email=data.email,
            name=data.name,
            avatar_url=data.avatar_url,
            subscription_type=data.subscription_type or "free",
            subscription_expires_at=None,
            trial_ends_at=utcnow() + timedelta(days=settings.TRIAL_DAYS),
        )
        self.db.add(user)

        try:
            self.db.commit()
        except IntegrityError:
            # Outro request inseriu o mesmo email entre a verificação e o insert
            self.db.rollback()
            logger.warning(f"Duplicate email on insert: {data.email}")
            raise ConflictError(f"User with email {data.email} already exists")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"User creation failed: {e}", exc_info=True)
            raise

        self.db.refresh(user)
        logger.info(f"User created: id={user.id}, subscription_type={user.subscription_type}")
        return user

    def update_user(self, patch: UserPatch) -> Optional[User]:
        """
        Aplica somente os campos enviados e sempre atualiza updated_at.
        Retorna None se o usuário não existir.
        """
        user = self.get_by_id(patch.id)
        if not user:
            logger.warning(f"User not found for update: {patch.id}")
            return None

        changes = patch.changes()
        new_email = changes.get("email")
        if new_email and new_email != user.email and self.get_by_email(new_email):
            raise ConflictError(f"User with email {new_email} already exists")

        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = utcnow()

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"User with email {new_email} already exists")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"User subscription update failed: {e}", exc_info=True)
            raise

        self.db.refresh(user)
        logger.info(f"User {user.id} updated: fields={sorted(changes)}")
        return user
