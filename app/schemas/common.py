"""
Schemas Pydantic compartilhados
"""
from pydantic import BaseModel, model_validator
from typing import Any, ClassVar, Dict, FrozenSet
from datetime import datetime


class HealthcheckResponse(BaseModel):
    status: str
    timestamp: datetime


class FieldPatch(BaseModel):
    """
    Base para updates parciais.

    Um campo está "ausente" quando não foi enviado e "presente" quando foi,
    mesmo que com valor null (controlado por model_fields_set). Campos de
    colunas NOT NULL listados em non_nullable_fields rejeitam null explícito.
    """

    non_nullable_fields: ClassVar[FrozenSet[str]] = frozenset()
    key_fields: ClassVar[FrozenSet[str]] = frozenset({"id"})

    @model_validator(mode="after")
    def reject_explicit_null(self):
        for field in self.model_fields_set & self.non_nullable_fields:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def is_set(self, field: str) -> bool:
        return field in self.model_fields_set

    def changes(self) -> Dict[str, Any]:
        """Retorna apenas os campos presentes, sem as chaves de identificação"""
        return self.model_dump(exclude_unset=True, exclude=set(self.key_fields))
