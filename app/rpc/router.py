"""
Monta as procedures registradas como rotas FastAPI
"""
import logging
from typing import Annotated
from fastapi import APIRouter, Depends, Query
from pydantic import TypeAdapter
from sqlalchemy.orm import Session
from app.database import get_db
from app.rpc.registry import QUERY, Procedure, ProcedureRegistry

logger = logging.getLogger(__name__)


def _make_endpoint(procedure: Procedure):
    handler = procedure.handler
    input_model = procedure.input_model

    if not procedure.uses_db:
        async def endpoint():
            return handler()
        return endpoint

    if input_model is None:
        async def endpoint(db: Session = Depends(get_db)):
            return handler(db)
        return endpoint

    if procedure.kind == QUERY:
        async def endpoint(data: Annotated[input_model, Query()], db: Session = Depends(get_db)):
            return handler(db, data)
    else:
        async def endpoint(data: input_model, db: Session = Depends(get_db)):
            return handler(db, data)
    return endpoint


def describe_procedure(procedure: Procedure) -> dict:
    """Metadados e JSON Schemas de uma procedure (tipos compartilhados com o cliente)"""
    return {
        "name": procedure.name,
        "kind": procedure.kind,
        "summary": procedure.summary,
        "input_schema": procedure.input_model.model_json_schema() if procedure.input_model else None,
        "output_schema": TypeAdapter(procedure.output).json_schema() if procedure.output is not None else None,
    }


def build_rpc_router(registry: ProcedureRegistry, prefix: str = "/rpc") -> APIRouter:
    """
    Cria um APIRouter com uma rota por procedure:
    - query    -> GET  {prefix}/<nome>
    - mutation -> POST {prefix}/<nome>
    """
    router = APIRouter(prefix=prefix, tags=["rpc"])

    @router.get("", summary="Lista as procedures registradas")
    async def list_procedures():
        return {"procedures": [describe_procedure(p) for p in registry]}

    for procedure in registry:
        router.add_api_route(
            f"/{procedure.name}",
            _make_endpoint(procedure),
            methods=["GET"] if procedure.kind == QUERY else ["POST"],
            response_model=procedure.output,
            name=procedure.name,
            operation_id=procedure.name,
            summary=procedure.summary or procedure.name,
        )
        logger.debug(f"RPC procedure mounted: {procedure.kind} {prefix}/{procedure.name}")

    return router
