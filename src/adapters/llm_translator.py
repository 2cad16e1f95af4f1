"""Adaptador de traducción IA (OpenAI SDK).

Responsabilidad:
- Construir el prompt de sistema con la forma exacta del comando JSON.
- Llamar al proveedor IA (SDK OpenAI compatible) con temperatura 0.
- Pasar la salida por la misma puerta de validación que cualquier input externo.
"""

from __future__ import annotations

import json
import logging
import re

from openai import AsyncOpenAI, OpenAIError

from core.config import AppSettings
from core.domain.errors import CommandValidationError, EmptyResponseError, MalformedJsonError
from core.domain.models import SearchCommand
from core.domain.schema import validate_search_command

logger = logging.getLogger(__name__)

_LOG_TAG = "Error in OpenAITranslator.translate"

_JSON_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def build_openai_client(settings: AppSettings | None = None) -> AsyncOpenAI:
    settings = settings or AppSettings()
    return AsyncOpenAI(
        # El SDK exige una key no vacía al construir; sin key falla la primera llamada.
        api_key=settings.ai_api_key or "missing",
        base_url=settings.ai_base_url,
        timeout=settings.ai_timeout_seconds,
        max_retries=settings.ai_max_retries,
    )


def build_system_prompt() -> str:
    """Prompt fijo: forma del JSON, mapeo de precios, orden y `open_now`."""

    return (
        "You are a restaurant search assistant. Convert user messages into a structured JSON command.\n\n"
        "Output ONLY valid JSON with this exact structure:\n"
        "{\n"
        '  "action": "restaurant_search",\n'
        '  "parameters": {\n'
        '    "query": "cuisine type or restaurant name",\n'
        '    "near": "location",\n'
        '    "min_price": 1,\n'
        '    "max_price": 4,\n'
        '    "open_now": true,\n'
        '    "sort": "RELEVANCE"\n'
        "  }\n"
        "}\n\n"
        "Field rules:\n"
        '- "query" (required): cuisine type, dish or restaurant name mentioned by the user.\n'
        '- "near" (required): the location the user mentions. If they say "near me" without a place, use "me".\n'
        '- "min_price" / "max_price" (optional): integers from 1 to 4. '
        "cheap=1, moderate=2, expensive=3, very expensive=4. "
        'For "cheap" set max_price=1; for "expensive" set min_price=3. min_price must not exceed max_price.\n'
        '- "open_now" (optional): true for phrases like "open now", "currently open", "still open"; '
        'false for phrases like "closed", "opens later"; otherwise omit the field.\n'
        '- "sort" (optional): "RATING" for best rated / top rated; '
        '"DISTANCE" for closest, nearest or farthest; '
        '"POPULARITY" for popular or trending; otherwise "RELEVANCE".\n\n'
        "Rules:\n"
        "- Only include optional fields the user actually implies.\n"
        "- Numbers must be JSON numbers and booleans must be JSON booleans, never strings.\n"
        "- Do NOT include trailing commas.\n"
        "- Do NOT include any explanation, comments, markdown or text outside the JSON.\n"
    )


def _strip_json_fence(text: str) -> str:
    match = _JSON_FENCE_RE.match(text.strip())
    if match:
        return match.group(1)
    return text


class OpenAITranslator:
    """Traduce mensajes libres a `SearchCommand` usando un chat model.

    El LLM se trata como un generador no confiable: cualquier salida pasa por
    `validate_search_command` antes de salir de aquí.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_openai_client(self._settings)
        self._system_prompt = build_system_prompt()

    @property
    def model(self) -> str:
        return self._settings.ai_model

    async def translate(self, message: str) -> SearchCommand:
        try:
            completion = await self._client.chat.completions.create(
                model=self._settings.ai_model,
                messages=[
                    {"role": "system", "content": self._system_prompt},
                    {"role": "user", "content": message},
                ],
                temperature=0,
            )
        except OpenAIError as exc:
            logger.error("%s: provider call failed: %s", _LOG_TAG, exc)
            raise

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            logger.error("%s: empty completion", _LOG_TAG)
            raise EmptyResponseError()

        try:
            data = json.loads(_strip_json_fence(content))
        except json.JSONDecodeError as exc:
            logger.error("%s: invalid JSON (%s): %r", _LOG_TAG, exc, content[:500])
            raise MalformedJsonError() from exc

        try:
            command = validate_search_command(data)
        except CommandValidationError as exc:
            details = "; ".join(exc.violations)
            logger.error("%s: schema violations: %s", _LOG_TAG, details)
            raise CommandValidationError(
                f"LLM response validation error: {details}",
                exc.violations,
            ) from exc

        logger.info("Translated message into command: %s", command.parameters.to_query_params())
        return command
