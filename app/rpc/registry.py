"""
Registro de procedures RPC (nome -> handler, tipo, schemas de entrada e saída)
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Type
from pydantic import BaseModel

QUERY = "query"
MUTATION = "mutation"


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: str  # query | mutation
    handler: Callable[..., Any]
    input_model: Optional[Type[BaseModel]]
    output: Any  # tipo usado como response_model
    summary: str = ""
    uses_db: bool = True


class ProcedureRegistry:
    """
    Procedures registradas por nome.

    Handlers recebem (db, payload), (db) ou nenhum argumento, conforme
    uses_db e input_model.
    """

    def __init__(self):
        self._procedures: Dict[str, Procedure] = {}

    def register(self, procedure: Procedure) -> Procedure:
        if procedure.kind not in (QUERY, MUTATION):
            raise ValueError(f"Invalid procedure kind: {procedure.kind}")
        if procedure.name in self._procedures:
            raise ValueError(f"Procedure already registered: {procedure.name}")
        self._procedures[procedure.name] = procedure
        return procedure

    def _decorator(self, kind: str, name: str, input_model, output, uses_db: bool):
        def wrap(handler: Callable[..., Any]) -> Callable[..., Any]:
            self.register(Procedure(
                name=name,
                kind=kind,
                handler=handler,
                input_model=input_model,
                output=output,
                summary=(handler.__doc__ or "").strip(),
                uses_db=uses_db,
            ))
            return handler
        return wrap

    def query(self, name: str, input_model=None, output=None, uses_db: bool = True):
        return self._decorator(QUERY, name, input_model, output, uses_db)

    def mutation(self, name: str, input_model=None, output=None, uses_db: bool = True):
        return self._decorator(MUTATION, name, input_model, output, uses_db)

    def get(self, name: str) -> Optional[Procedure]:
        return self._procedures.get(name)

    def names(self):
        return list(self._procedures)

    def __iter__(self) -> Iterator[Procedure]:
        return iter(self._procedures.values())

    def __len__(self) -> int:
        return len(self._procedures)
