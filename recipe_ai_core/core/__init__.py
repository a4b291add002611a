"""
Interfaces del motor de generación de recetas.

Los colaboradores externos (modelo de lenguaje, catálogo de nombres,
persistencia) se definen como Protocols en `abstractions` para que el
orquestador se pueda construir con implementaciones reales o fakes.
"""
