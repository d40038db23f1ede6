"""LLM adapter that asks OpenAI chat completions for circuit designs in JSON mode."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from circuitgen.config import settings

from .prompts import SYSTEM_PROMPT

JSONPayload = Union[Dict[str, Any], List[Any]]


class CircuitDesignLLMClient:
    """Thin wrapper around the OpenAI chat completions API."""

    def __init__(
        self,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        system_prompt: str = SYSTEM_PROMPT,
        client: Any = None,
    ) -> None:
        self._model = model or settings.openai_model
        self._temperature = (
            settings.openai_temperature if temperature is None else temperature
        )
        self._system_prompt = system_prompt
        self._client = client or self._build_client()

    @staticmethod
    def _build_client() -> Any:
        api_key = settings.openai_api_key
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is not configured.")

        from openai import OpenAI

        return OpenAI(api_key=api_key, base_url=settings.openai_base_url or None)

    def design(self, prompt: str) -> JSONPayload:
        """Send the circuit prompt and return the parsed JSON answer (blocking)."""
        completion = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": self._system_prompt},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=self._temperature,
        )
        return self._extract_json(completion)

    @classmethod
    def _extract_json(cls, completion: Any) -> JSONPayload:
        for text in cls._message_texts(completion):
            parsed = cls._safe_json_load(text)
            if parsed is not None:
                return parsed
        raise RuntimeError("Unable to extract JSON from LLM response")

    @staticmethod
    def _message_texts(completion: Any) -> List[str]:
        """Text segments of the first choice, from an SDK object or a raw dict."""
        if not isinstance(completion, dict):
            dump = getattr(completion, "model_dump", None)
            if dump is None:
                raise RuntimeError("Unexpected response type from OpenAI client")
            completion = dump()

        choices = completion.get("choices") or []
        if not choices:
            return []

        content = (choices[0].get("message") or {}).get("content")
        if isinstance(content, str):
            return [content]
        if isinstance(content, list):
            return [
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in content
            ]
        return []

    @staticmethod
    def _safe_json_load(text: str) -> Optional[JSONPayload]:
        text = text.strip()
        attempts = [text]
        # Models sometimes wrap the JSON in prose or code fences
        for opener, closer in (("{", "}"), ("[", "]")):
            first, last = text.find(opener), text.rfind(closer)
            if first != -1 and last > first:
                attempts.append(text[first : last + 1])

        for attempt in attempts:
            try:
                parsed = json.loads(attempt)
            except json.JSONDecodeError:
                continue
            if isinstance(parsed, (dict, list)):
                return parsed
        return None
