"""
Persistencia (SQLAlchemy): engine/sesiones, modelos ORM y store de recetas.
"""
