from sqlalchemy.orm import Session
from typing import List, Optional
from app.models.template import Template
from app.models.template_category import TemplateCategory


class CatalogService:
    """Leitura do catálogo de templates (categorias e templates são criados via seed)"""

    def __init__(self, db: Session):
        self.db = db

    def get_categories(self) -> List[TemplateCategory]:
        """Retorna todas as categorias ordenadas por sort_order"""
        return (
            self.db.query(TemplateCategory)
            .order_by(TemplateCategory.sort_order.asc(), TemplateCategory.id.asc())
            .all()
        )

    def get_templates_by_category(self, category_id: int, limit: int = 20, offset: int = 0) -> List[Template]:
        """Templates de uma categoria em ordem de inserção, paginados por offset"""
        return (
            self.db.query(Template)
            .filter(Template.category_id == category_id)
            .order_by(Template.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def get_template_by_id(self, template_id: int) -> Optional[Template]:
        """Retorna um template por ID"""
        return self.db.query(Template).filter(Template.id == template_id).first()
