"""
Formulário em etapas gerado a partir de template_data["fields"]
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

DEFAULT_FORM_FIELDS = [
    {"id": "full_name", "label": "Full Name", "type": "text", "required": True, "step": 0},
    {"id": "email", "label": "Email Address", "type": "email", "required": True, "step": 0},
    {"id": "phone", "label": "Phone Number", "type": "tel", "required": False, "step": 0},
    {"id": "address", "label": "Address", "type": "textarea", "required": True, "step": 1},
    {"id": "company", "label": "Company Name", "type": "text", "required": False, "step": 1},
    {"id": "position", "label": "Position/Title", "type": "text", "required": False, "step": 1},
    {"id": "additional_info", "label": "Additional Information", "type": "textarea", "required": False, "step": 2},
]


@dataclass(frozen=True)
class FormField:
    id: str
    label: str
    type: str = "text"
    required: bool = False
    step: int = 0


class IncompleteStepError(ValueError):
    def __init__(self, missing: List[str]):
        super().__init__(f"Required fields missing: {', '.join(missing)}")
        self.missing = missing


def fields_from_template_data(template_data: Optional[Dict[str, Any]]) -> List[FormField]:
    """Lê os campos do template; sem campos definidos usa o formulário padrão"""
    raw_fields = (template_data or {}).get("fields") or DEFAULT_FORM_FIELDS
    fields = []
    for raw in raw_fields:
        if not isinstance(raw, dict) or not raw.get("id"):
            raise ValueError(f"Invalid form field definition: {raw!r}")
        fields.append(FormField(
            id=str(raw["id"]),
            label=str(raw.get("label") or raw["id"]),
            type=str(raw.get("type") or "text"),
            required=bool(raw.get("required", False)),
            step=int(raw.get("step", 0)),
        ))
    return fields


class FormWizard:
    def __init__(self, template, title: Optional[str] = None, today: Optional[date] = None):
        self.template = template
        self.fields = fields_from_template_data(template.template_data)
        self.steps = sorted({field.step for field in self.fields})
        self.step_index = 0
        self.values: Dict[str, str] = {}
        self.title = title or f"{template.title} - {(today or date.today()).isoformat()}"

    @property
    def current_step(self) -> int:
        return self.steps[self.step_index]

    @property
    def current_fields(self) -> List[FormField]:
        return [field for field in self.fields if field.step == self.current_step]

    @property
    def is_first_step(self) -> bool:
        return self.step_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.step_index == len(self.steps) - 1

    def set_value(self, field_id: str, value: str) -> None:
        if field_id not in {field.id for field in self.fields}:
            raise KeyError(f"Unknown field: {field_id}")
        self.values[field_id] = value

    def missing_required(self, step: Optional[int] = None) -> List[str]:
        """Campos obrigatórios vazios (na etapa informada ou em todas)"""
        return [
            field.id
            for field in self.fields
            if field.required
            and (step is None or field.step == step)
            and not str(self.values.get(field.id, "")).strip()
        ]

    def next(self) -> bool:
        """
        Avança uma etapa. Retorna False na última etapa (hora de salvar).

        Raises:
            IncompleteStepError: campos obrigatórios da etapa atual vazios
        """
        missing = self.missing_required(self.current_step)
        if missing:
            raise IncompleteStepError(missing)
        if self.is_last_step:
            return False
        self.step_index += 1
        return True

    def previous(self) -> bool:
        if self.is_first_step:
            return False
        self.step_index -= 1
        return True

    def document_data(self) -> Dict[str, str]:
        missing = self.missing_required()
        if missing:
            raise IncompleteStepError(missing)
        return dict(self.values)
