"""Gemini REST client producing compliance risk bullet points."""
from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx

from compliance_tracker.config import SETTINGS, Settings
from compliance_tracker.domain.errors import InsightServiceError

logger = logging.getLogger(__name__)

BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiInsightProvider:
    def __init__(
        self,
        api_key: str | None,
        model: str,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=BASE_URL, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings = SETTINGS) -> "GeminiInsightProvider":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.insight_timeout_seconds,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "GeminiInsightProvider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_available(self) -> bool:
        return bool(self._api_key)

    def generate(self, prompt: str) -> list[str]:
        if not self._api_key:
            raise InsightServiceError("Gemini API key not configured")
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        try:
            response = self._client.post(
                f"/models/{self._model}:generateContent",
                headers={"x-goog-api-key": self._api_key},
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            raise InsightServiceError("Gemini request timed out") from exc
        except httpx.HTTPError as exc:
            raise InsightServiceError(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            raise InsightServiceError("Gemini returned a non-JSON body") from exc

        summary = _parse_summary(_extract_text(data))
        logger.info("Gemini returned %d insight bullets", len(summary))
        return summary


def _extract_text(data: dict[str, Any]) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(str(part.get("text") or "") for part in parts if isinstance(part, dict))
    except (KeyError, IndexError, TypeError) as exc:
        raise InsightServiceError("Gemini response has no readable candidate text") from exc


def _parse_summary(text: str) -> list[str]:
    if not text.strip():
        raise InsightServiceError("Gemini response was empty")
    try:
        result = json.loads(text)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if not match:
            raise InsightServiceError("Gemini response was not valid JSON")
        try:
            result = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise InsightServiceError("Gemini response was not valid JSON") from exc
    summary = result.get("summary") if isinstance(result, dict) else None
    if not isinstance(summary, list):
        raise InsightServiceError("Gemini response is missing a summary list")
    return [str(item) for item in summary]
