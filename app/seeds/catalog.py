"""
Seed para inserir o catálogo padrão (categorias e templates) no banco de dados
"""
import logging
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session
from app.client.wizard import DEFAULT_FORM_FIELDS
from app.database import SessionLocal
from app.models.template import Template
from app.models.template_category import TemplateCategory

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {
        "name": "Business",
        "slug": "business",
        "description": "Professional documents for business needs",
        "icon_url": "📊",
        "sort_order": 1,
    },
    {
        "name": "Personal",
        "slug": "personal",
        "description": "Personal documents and forms",
        "icon_url": "👤",
        "sort_order": 2,
    },
    {
        "name": "Real Estate",
        "slug": "real-estate",
        "description": "Property and real estate documents",
        "icon_url": "🏠",
        "sort_order": 3,
    },
]

# (slug da categoria, título, descrição, premium, preço)
DEFAULT_TEMPLATES = [
    ("business", "Business Plan", "A complete business plan for startups", True, "4.95"),
    ("business", "Invoice", "Simple invoice for freelancers", False, None),
    ("personal", "Professional Resume", "Clean one-page resume", False, None),
    ("personal", "Cover Letter", "Cover letter matching the resume", True, "2.95"),
    ("real-estate", "Rental Agreement", "Residential lease agreement", True, "6.95"),
]


def seed_catalog(db: Optional[Session] = None) -> dict:
    """
    Insere categorias (por slug) e templates (por título dentro da categoria)
    que ainda não existem.

    Returns:
        Contagem de registros criados: {"categories": n, "templates": n}
    """
    owns_session = db is None
    db = db or SessionLocal()
    created = {"categories": 0, "templates": 0}
    try:
        categories = {}
        for data in DEFAULT_CATEGORIES:
            category = db.query(TemplateCategory).filter(TemplateCategory.slug == data["slug"]).first()
            if not category:
                category = TemplateCategory(**data)
                db.add(category)
                db.flush()  # Para obter o ID
                created["categories"] += 1
                logger.info(f"Categoria '{data['name']}' criada")
            categories[data["slug"]] = category

        for slug, title, description, is_premium, price in DEFAULT_TEMPLATES:
            category = categories[slug]
            existing = db.query(Template).filter(
                Template.category_id == category.id,
                Template.title == title
            ).first()
            if existing:
                continue
            db.add(Template(
                title=title,
                description=description,
                category_id=category.id,
                template_data={"fields": DEFAULT_FORM_FIELDS},
                is_premium=is_premium,
                price=Decimal(price) if price else None,
            ))
            created["templates"] += 1
            logger.info(f"Template '{title}' criado em '{slug}'")

        db.commit()
        logger.info(f"Seed do catálogo concluído: {created}")
        return created
    except Exception as e:
        db.rollback()
        logger.error(f"Erro ao executar seed do catálogo: {e}", exc_info=True)
        raise
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_catalog()
