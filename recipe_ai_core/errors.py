"""
Excepciones del motor de generación de recetas.

Jerarquía:

    RecipeAIError
    ├── ValidationError          (input del usuario inválido → HTTP 400)
    └── GenerationError          (falló la generación → HTTP 500)
        ├── ParseError           (la respuesta del modelo no se pudo interpretar)
        ├── TransportError       (falló la llamada al proveedor del modelo)
        └── PersistenceError     (falló la lectura/escritura en la base)

Los mensajes se muestran tal cual en la UI: la capa HTTP no los reescribe.
"""


class RecipeAIError(Exception):
    """Base de todos los errores del motor."""


class ValidationError(RecipeAIError):
    """La request no cumple las precondiciones (ej: sin cocinas o ingredientes)."""


class GenerationError(RecipeAIError):
    """No se pudo producir una receta."""


class ParseError(GenerationError):
    """La respuesta del modelo no coincide con ningún formato soportado."""


class TransportError(GenerationError):
    """Error de red, cuota o respuesta vacía del proveedor del modelo."""


class PersistenceError(GenerationError):
    """Error leyendo o escribiendo recetas en la base de datos."""
