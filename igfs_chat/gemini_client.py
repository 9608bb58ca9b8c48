from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import httpx

from .config import Settings
from .store import Turn


class ProviderError(RuntimeError):
  pass


def to_contents(history: Sequence[Turn], message: str) -> List[Dict[str, Any]]:
  contents = [{"role": turn.role, "parts": [{"text": turn.text}]} for turn in history]
  contents.append({"role": "user", "parts": [{"text": message}]})
  return contents


def extract_text(data: Dict[str, Any]) -> str:
  candidates = data.get("candidates") or []
  if not isinstance(candidates, list):
    raise ProviderError("Gemini returned malformed candidates")
  if not candidates:
    return ""
  candidate = candidates[0]
  if not isinstance(candidate, dict):
    raise ProviderError("Gemini returned a malformed candidate")
  content = candidate.get("content") or {}
  parts = content.get("parts") if isinstance(content, dict) else None
  if not parts:
    return ""
  if not isinstance(parts, list):
    raise ProviderError("Gemini returned malformed content parts")
  texts = []
  for part in parts:
    text = part.get("text") if isinstance(part, dict) else None
    if text is None:
      continue
    if not isinstance(text, str):
      raise ProviderError("Gemini returned a non-text content part")
    texts.append(text)
  return "".join(texts)


class GeminiClient:
  def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
    self._api_key = settings.gemini_api_key
    self._base_url = settings.gemini_base_url.rstrip("/")
    self._model = settings.gemini_model
    self._max_output_tokens = settings.max_output_tokens
    self._temperature = settings.temperature
    self._timeout = settings.timeout_seconds
    self._transport = transport

  @property
  def model(self) -> str:
    return self._model

  async def generate(self, history: Sequence[Turn], message: str) -> str:
    """Send ``message`` with ``history`` as prior context and return the reply text."""
    try:
      async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
        response = await client.post(
          f"{self._base_url}/models/{self._model}:generateContent",
          headers={"x-goog-api-key": self._api_key},
          json={
            "contents": to_contents(history, message),
            "generationConfig": {
              "maxOutputTokens": self._max_output_tokens,
              "temperature": self._temperature,
            },
          },
        )
    except httpx.TimeoutException as exc:
      raise ProviderError(f"Gemini request timed out after {self._timeout}s") from exc
    except httpx.HTTPError as exc:
      raise ProviderError(f"Gemini request failed: {exc}") from exc

    if response.status_code >= 400:
      raise ProviderError(
        f"Gemini error {response.status_code}: {_error_message(response)}"
      )

    try:
      data = response.json()
    except ValueError as exc:
      raise ProviderError("Gemini returned a non-JSON response") from exc
    if not isinstance(data, dict):
      raise ProviderError("Gemini returned an unexpected response shape")
    return extract_text(data)


def _error_message(response: httpx.Response) -> str:
  try:
    data = response.json()
  except ValueError:
    return response.text
  if isinstance(data, dict) and isinstance(data.get("error"), dict):
    return data["error"].get("message") or response.text
  return response.text
