from app.database import Base
from app.models.user import User
from app.models.template_category import TemplateCategory
from app.models.template import Template
from app.models.user_document import UserDocument
from app.models.purchase import Purchase

__all__ = [
    "Base",
    "User",
    "TemplateCategory",
    "Template",
    "UserDocument",
    "Purchase",
]
