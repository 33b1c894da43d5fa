"""
Testes do catálogo (getTemplateCategories, getTemplatesByCategory, getTemplateById)
"""
from app.models.template import Template
from app.models.template_category import TemplateCategory
from app.seeds.catalog import DEFAULT_CATEGORIES, DEFAULT_TEMPLATES, seed_catalog


def _category(db, slug):
    return db.query(TemplateCategory).filter(TemplateCategory.slug == slug).one()


def test_categories_empty(rpc):
    assert rpc.get_template_categories() == []


def test_categories_ordered_by_sort_order(rpc, db_session):
    db_session.add_all([
        TemplateCategory(name="C", slug="c", sort_order=3),
        TemplateCategory(name="A", slug="a", sort_order=1),
        TemplateCategory(name="B", slug="b", sort_order=2),
    ])
    db_session.commit()

    categories = rpc.get_template_categories()
    assert [c.slug for c in categories] == ["a", "b", "c"]


def test_templates_by_category(rpc, catalog):
    business = _category(catalog, "business")
    templates = rpc.get_templates_by_category(business.id)

    expected = [title for slug, title, *_ in DEFAULT_TEMPLATES if slug == "business"]
    assert [t.title for t in templates] == expected
    assert all(t.category_id == business.id for t in templates)


def test_templates_pagination(rpc, db_session):
    category = TemplateCategory(name="Many", slug="many", sort_order=1)
    db_session.add(category)
    db_session.flush()
    for i in range(25):
        db_session.add(Template(title=f"T{i:02d}", category_id=category.id, template_data={}))
    db_session.commit()

    first_page = rpc.get_templates_by_category(category.id)
    assert len(first_page) == 20  # limit padrão

    page = rpc.get_templates_by_category(category.id, limit=10, offset=20)
    assert [t.title for t in page] == ["T20", "T21", "T22", "T23", "T24"]


def test_templates_unknown_category_is_empty(rpc, catalog):
    assert rpc.get_templates_by_category(424242) == []


def test_templates_large_limit(rpc, catalog):
    """limit não tem teto: qualquer inteiro positivo é aceito"""
    business = _category(catalog, "business")
    templates = rpc.get_templates_by_category(business.id, limit=200)
    assert len(templates) == 2


def test_templates_limit_must_be_positive(client, catalog):
    response = client.get("/rpc/getTemplatesByCategory", params={"category_id": 1, "limit": 0})
    assert response.status_code == 422
    assert response.json()["code"] == "BAD_REQUEST"


def test_templates_missing_category_id(client):
    response = client.get("/rpc/getTemplatesByCategory")
    assert response.status_code == 422


def test_template_by_id(rpc, catalog):
    template = catalog.query(Template).filter(Template.title == "Business Plan").one()
    result = rpc.get_template_by_id(template.id)

    assert result.id == template.id
    assert result.is_premium is True
    assert result.price == 4.95
    assert isinstance(result.price, float)
    assert result.template_data["fields"]
    assert result.downloads_count == 0


def test_template_by_id_not_found(rpc, client, catalog):
    assert rpc.get_template_by_id(999999) is None

    response = client.get("/rpc/getTemplateById", params={"id": 999999})
    assert response.status_code == 200
    assert response.json() is None


def test_free_template_has_no_price(rpc, catalog):
    template = catalog.query(Template).filter(Template.title == "Invoice").one()
    assert rpc.get_template_by_id(template.id).price is None


def test_seed_is_idempotent(db_session):
    first = seed_catalog(db_session)
    second = seed_catalog(db_session)

    assert first == {"categories": len(DEFAULT_CATEGORIES), "templates": len(DEFAULT_TEMPLATES)}
    assert second == {"categories": 0, "templates": 0}
    assert db_session.query(TemplateCategory).count() == len(DEFAULT_CATEGORIES)
    assert db_session.query(Template).count() == len(DEFAULT_TEMPLATES)
