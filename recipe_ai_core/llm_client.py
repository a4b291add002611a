from __future__ import annotations

"""
Cliente del modelo de lenguaje (OpenAI chat.completions).

Implementa `core.abstractions.GenerationClient`. No interpreta la respuesta:
devuelve el texto crudo para que lo procese `recipe_ai_core.parser`.
"""

import logging

from openai import OpenAI, OpenAIError

from .config import get_settings
from .errors import TransportError

logger = logging.getLogger(__name__)


def get_client() -> OpenAI:
    settings = get_settings()
    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is not configured in .env")
    return OpenAI(api_key=settings.openai_api_key, timeout=settings.openai_timeout_s)


class OpenAIGenerationClient:
    """
    Generation Client sobre OpenAI.

    Args:
        client: Cliente OpenAI ya construido. Si es None se crea con `get_client()`.
        temperature / max_tokens: Si son None se toman de `Settings`.
    """

    def __init__(
        self,
        client: OpenAI | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        settings = get_settings()
        self._client = client or get_client()
        self.temperature = settings.openai_temperature if temperature is None else temperature
        self.max_tokens = settings.openai_max_tokens if max_tokens is None else max_tokens

    def complete(self, system_prompt: str, user_prompt: str, model: str) -> str:
        """
        Envía un chat completion y devuelve el contenido del primer choice.

        Raises:
            TransportError: si OpenAI falla (red, cuota, auth) o la respuesta viene vacía.
        """
        try:
            completion = self._client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI call failed ({type(e).__name__}): {e}")
            raise TransportError(str(e) or type(e).__name__) from e

        content = ""
        if completion.choices:
            content = completion.choices[0].message.content or ""

        if not content.strip():
            raise TransportError("Empty response from OpenAI")

        return content
