"""
API HTTP principal para recipe-ai-core.

Esta aplicación FastAPI expone endpoints REST que usan el core interno
(recipe_ai_core.engine) para generar recetas con IA.

Uso:
    uvicorn api.main:app --reload --port 8000
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_ai_core.db.database import init_db
from recipe_ai_core.errors import RecipeAIError, ValidationError

from .routes import catalog, recipes, substitutions

# Cargar variables de entorno
load_dotenv()

# Determinar ambiente
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configurar logging según ambiente
log_level = getattr(logging, LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)
logger.info(f"🚀 Iniciando API en ambiente: {ENVIRONMENT}")

app = FastAPI(
    title="Recipe AI Core API",
    description="API para generar recetas asistidas por IA a partir de cocinas e ingredientes",
    version="0.1.0",
)

# CORS: configurar según ambiente
cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
cors_origins = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]

logger.info(f"🌐 CORS origins configurados: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def create_tables() -> None:
    """Crea las tablas que falten en la base configurada (DATABASE_URL)."""
    init_db()


@app.exception_handler(RecipeAIError)
async def recipe_error_handler(request: Request, exc: RecipeAIError):
    """
    ValidationError → 400; cualquier otro error del motor → 500.
    El mensaje se devuelve tal cual para que la UI lo muestre.
    """
    status_code = 400 if isinstance(exc, ValidationError) else 500
    if status_code == 500:
        logger.error(f"Error en {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=status_code, content={"success": False, "error": str(exc)})


_FIELD_ERRORS = {
    "cuisines": "At least one cuisine must be selected",
    "ingredients": "At least one ingredient must be selected",
}


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Body/query inválido → 400 con el mismo formato que el resto de los errores.
    Una lista de cocinas o ingredientes que no es lista se reporta igual que
    una lista vacía.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ())]
    message = next((_FIELD_ERRORS[part] for part in loc if part in _FIELD_ERRORS), None)
    if message is None:
        where = ".".join(loc) or "request"
        message = f"Invalid request ({where}): {first.get('msg', 'validation error')}"
    return JSONResponse(status_code=400, content={"success": False, "error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# Registrar rutas
app.include_router(recipes.router)
app.include_router(catalog.router)
app.include_router(substitutions.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "recipe-ai-core-api"}


@app.get("/health")
async def health():
    """Health check detallado."""
    return {
        "status": "ok",
        "service": "recipe-ai-core-api",
        "version": "0.1.0",
        "environment": ENVIRONMENT,
    }
