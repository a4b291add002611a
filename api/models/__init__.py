"""Modelos pydantic de request/response de la API."""
