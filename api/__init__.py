"""
API HTTP para recipe-ai-core.

Esta capa expone endpoints REST que usan el core interno (recipe_ai_core.engine)
para generar recetas a partir de cocinas e ingredientes seleccionados.

La API está diseñada para ser consumida por:
- UI web
- Scripts de automatización
"""
