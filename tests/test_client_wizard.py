"""
Testes do formulário em etapas
"""
from datetime import date
from types import SimpleNamespace
import pytest
from app.client.wizard import DEFAULT_FORM_FIELDS, FormWizard, IncompleteStepError, fields_from_template_data


def make_template(template_data=None):
    return SimpleNamespace(id=1, title="Invoice", template_data=template_data or {})


def fill_step(wizard):
    for field in wizard.current_fields:
        if field.required:
            wizard.set_value(field.id, f"value for {field.id}")


def test_default_fields_when_template_has_none():
    fields = fields_from_template_data({})
    assert [f.id for f in fields] == [f["id"] for f in DEFAULT_FORM_FIELDS]
    assert fields_from_template_data(None) == fields


def test_invalid_field_definition():
    with pytest.raises(ValueError):
        fields_from_template_data({"fields": [{"label": "No id"}]})


def test_default_title_uses_date():
    wizard = FormWizard(make_template(), today=date(2026, 10, 19))
    assert wizard.title == "Invoice - 2026-10-19"
    assert FormWizard(make_template(), title="Custom").title == "Custom"


def test_steps_follow_field_definitions():
    wizard = FormWizard(make_template())
    assert wizard.steps == [0, 1, 2]
    assert wizard.is_first_step
    assert [f.id for f in wizard.current_fields] == ["full_name", "email", "phone"]


def test_next_requires_current_step_fields():
    wizard = FormWizard(make_template())
    with pytest.raises(IncompleteStepError) as exc_info:
        wizard.next()
    assert exc_info.value.missing == ["full_name", "email"]
    assert wizard.step_index == 0


def test_whitespace_does_not_fill_required_field():
    wizard = FormWizard(make_template())
    wizard.set_value("full_name", "   ")
    assert "full_name" in wizard.missing_required(0)


def test_full_walkthrough():
    wizard = FormWizard(make_template())
    fill_step(wizard)
    assert wizard.next() is True
    fill_step(wizard)
    assert wizard.next() is True
    assert wizard.is_last_step
    assert wizard.next() is False

    data = wizard.document_data()
    assert data["full_name"] == "value for full_name"
    assert data["address"] == "value for address"
    assert "phone" not in data


def test_previous():
    wizard = FormWizard(make_template())
    assert wizard.previous() is False
    fill_step(wizard)
    wizard.next()
    assert wizard.previous() is True
    assert wizard.is_first_step


def test_unknown_field():
    wizard = FormWizard(make_template())
    with pytest.raises(KeyError):
        wizard.set_value("nope", "x")


def test_document_data_requires_all_steps():
    wizard = FormWizard(make_template())
    fill_step(wizard)
    with pytest.raises(IncompleteStepError) as exc_info:
        wizard.document_data()
    assert exc_info.value.missing == ["address"]


def test_custom_fields():
    template = make_template({"fields": [
        {"id": "tenant", "label": "Tenant", "required": True},
        {"id": "rent", "label": "Monthly rent", "type": "number", "step": 1},
    ]})
    wizard = FormWizard(template)
    assert wizard.steps == [0, 1]
    wizard.set_value("tenant", "Bruno")
    wizard.next()
    assert [f.type for f in wizard.current_fields] == ["number"]
