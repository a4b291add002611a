# recipe_ai_core/config.py
from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv

"""
recipe_ai_core.config
=====================

Gestión centralizada de configuración del motor de recetas.

Este módulo define:
- La estructura de configuración (`Settings`)
- El mecanismo para cargar variables desde entorno (.env)
- Un acceso único y cacheado a la configuración (`get_settings`)

Convenciones
------------
- Las variables de entorno se cargan desde un archivo `.env` si existe.
- Los defaults están pensados para desarrollo local.
- En producción, los valores deben venir del entorno real (Docker, CI, etc.).

Notas importantes
-----------------
- `load_dotenv()` se ejecuta al importar el módulo.
- Si la API key de OpenAI no está presente, el error se lanza en el lugar
  donde se construye el cliente (`llm_client.get_client`), no acá.
- `DATABASE_URL` se resuelve en `recipe_ai_core.db.database`.
"""

# Cargar variables de entorno desde .env (si existe)
load_dotenv()


@dataclass
class Settings:
    """
    Contenedor tipado de configuración global de la aplicación.

    Attributes
    ----------
    openai_api_key:
        API key de OpenAI. Debe estar presente para generar recetas.
    openai_model_text:
        Modelo por defecto para generar recetas. Se puede sobreescribir por request.
    openai_temperature:
        Temperatura de muestreo. Las recetas se benefician de algo de variedad.
    openai_max_tokens:
        Tope de tokens de la respuesta del modelo.
    openai_timeout_s:
        Timeout (segundos) del cliente HTTP de OpenAI. El motor no define
        timeouts propios: depende de este.
    avoid_list_limit:
        Cantidad máxima de nombres previos que se envían como "avoid-list"
        al regenerar. `None` = sin tope (comportamiento por defecto).
    lock_same_key:
        Si True, el orquestador serializa (dentro del proceso) las generaciones
        concurrentes para la misma combinación de cocinas/ingredientes.
    """

    # OpenAI
    openai_api_key: str
    openai_model_text: str = "gpt-4o-mini"
    openai_temperature: float = 0.8
    openai_max_tokens: int = 2000
    openai_timeout_s: float = 60.0

    # Política de regeneración
    avoid_list_limit: int | None = None

    # Concurrencia
    lock_same_key: bool = True


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return int(raw)


@lru_cache
def get_settings() -> Settings:
    """
    Devuelve una instancia única y cacheada de `Settings`.

    Variables de entorno utilizadas
    -------------------------------
    - OPENAI_API_KEY
    - OPENAI_MODEL_TEXT (default: "gpt-4o-mini")
    - OPENAI_TEMPERATURE (default: 0.8)
    - OPENAI_MAX_TOKENS (default: 2000)
    - OPENAI_TIMEOUT_S (default: 60)
    - AVOID_LIST_LIMIT (default: sin tope)
    - RECIPE_LOCK_SAME_KEY (default: true)

    Notas
    -----
    - En tests conviene llamar `get_settings.cache_clear()` después de
      modificar variables de entorno.
    """
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openai_model_text=os.getenv("OPENAI_MODEL_TEXT", "gpt-4o-mini"),
        openai_temperature=float(os.getenv("OPENAI_TEMPERATURE", "0.8")),
        openai_max_tokens=int(os.getenv("OPENAI_MAX_TOKENS", "2000")),
        openai_timeout_s=float(os.getenv("OPENAI_TIMEOUT_S", "60")),
        avoid_list_limit=_env_optional_int("AVOID_LIST_LIMIT"),
        lock_same_key=_env_bool("RECIPE_LOCK_SAME_KEY", True),
    )
