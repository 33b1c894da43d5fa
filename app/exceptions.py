"""
Erros de domínio levantados pelos services e convertidos em resposta HTTP em app.main
"""
from fastapi import status


class AppError(Exception):
    """Erro base da aplicação"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """Usuário, template ou documento referenciado não existe"""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(AppError):
    """Violação de unicidade (ex: email já cadastrado)"""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class ForbiddenError(AppError):
    """Usuário sem acesso ao recurso (ex: template premium sem assinatura)"""

    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
