from app.rpc.registry import MUTATION, QUERY, Procedure, ProcedureRegistry

__all__ = ["MUTATION", "QUERY", "Procedure", "ProcedureRegistry"]
