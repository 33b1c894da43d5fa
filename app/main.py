from contextlib import asynccontextmanager
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from app import models  # noqa: F401  registra os models no Base.metadata
from app.config import settings
from app.database import Base, engine
from app.exceptions import AppError
from app.rpc.procedures import registry
from app.rpc.router import build_rpc_router

# Configurar logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Inicializar limiter
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    default_limits=[settings.RATE_LIMIT_PER_IP],
    enabled=settings.RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created (AUTO_CREATE_TABLES)")
    if settings.SEED_CATALOG_ON_STARTUP:
        from app.seeds.catalog import seed_catalog
        seed_catalog()
    yield


app = FastAPI(
    title=settings.API_TITLE,
    description="API backend de templates de documentos",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Adicionar limiter ao app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Gera ou repassa o X-Request-ID de cada requisição"""
    rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    return response


def jsonable_errors(errors: list) -> list:
    """Mantém apenas os campos serializáveis dos erros do Pydantic (ctx pode conter exceções)"""
    return [
        {key: value for key, value in err.items() if key in ("type", "loc", "msg", "input")}
        for err in errors
    ]


def _error_body(request: Request, detail: str, code: str) -> dict:
    body = {"detail": detail, "code": code}
    rid = getattr(request.state, "request_id", None)
    if rid:
        body["request_id"] = rid
    return body


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Erros de domínio (NotFound, Conflict, Forbidden)"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.message, exc.code),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, detail, code),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Input inválido: rejeitado antes de chegar ao handler"""
    errs = exc.errors()
    detail = errs[0].get("msg", "Invalid input") if errs else "Invalid input"
    body = _error_body(request, detail, "BAD_REQUEST")
    body["errors"] = jsonable_errors(errs)
    return JSONResponse(status_code=422, content=body)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=_error_body(request, "Internal server error", "INTERNAL_SERVER_ERROR"),
    )


# Incluir router RPC
app.include_router(build_rpc_router(registry, prefix=settings.RPC_PREFIX))


@app.get("/")
async def root():
    return {"message": f"{settings.API_TITLE} está funcionando!"}


@app.get("/health")
async def health():
    """Health check básico"""
    return {"status": "healthy"}


@app.get("/health/live")
async def health_live():
    """Liveness check - verifica se a aplicação está viva"""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Readiness check - verifica se o banco responde"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception as e:
        logger.error(f"Readiness check failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "error": str(e)}
        )


@app.get("/health/detailed")
async def health_detailed():
    """Health check detalhado com status de dependências"""
    health_status = {
        "status": "healthy",
        "checks": {}
    }

    # Verificar banco de dados
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        health_status["checks"]["database"] = "ok"
    except Exception as e:
        health_status["checks"]["database"] = f"error: {str(e)}"
        health_status["status"] = "unhealthy"

    # Verificar Redis (somente se o rate limiting usa Redis)
    if settings.RATE_LIMIT_STORAGE_URI.startswith("redis"):
        try:
            import redis
            r = redis.from_url(settings.RATE_LIMIT_STORAGE_URI)
            r.ping()
            health_status["checks"]["redis"] = "ok"
        except Exception as e:
            health_status["checks"]["redis"] = f"error: {str(e)}"
            if health_status["status"] == "healthy":
                health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)
