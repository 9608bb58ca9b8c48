from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv


load_dotenv()


class ConfigError(RuntimeError):
  """Raised when the environment cannot produce usable settings."""


def _parse_origins(raw: str) -> List[str]:
  if raw.strip() == "*":
    return ["*"]
  return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _number(name: str, default: str, cast):
  raw = os.environ.get(name, default)
  try:
    return cast(raw)
  except ValueError as exc:
    raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
  """Application settings loaded from environment variables.

  Keep all credentials and config centralized here.
  """

  gemini_api_key: str
  port: int = 5174
  host: str = "0.0.0.0"
  allowed_origins: List[str] = field(
    default_factory=lambda: ["https://igsofficial25.com"]
  )
  gemini_model: str = "gemini-1.5-flash"
  gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
  max_output_tokens: int = 1000
  temperature: float = 0.7
  timeout_seconds: float = 30.0
  log_level: str = "INFO"

  @classmethod
  def from_env(cls) -> "Settings":
    api_key = os.environ.get("GEMINI_API_KEY", "").strip()
    if not api_key:
      raise ConfigError("Missing GEMINI_API_KEY in environment or .env file")

    return cls(
      gemini_api_key=api_key,
      port=_number("PORT", "5174", int),
      host=os.environ.get("HOST", "0.0.0.0"),
      allowed_origins=_parse_origins(
        os.environ.get("ALLOWED_ORIGINS", "https://igsofficial25.com")
      ),
      gemini_model=os.environ.get("GEMINI_MODEL", "gemini-1.5-flash"),
      gemini_base_url=os.environ.get(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
      ),
      max_output_tokens=_number("GEMINI_MAX_OUTPUT_TOKENS", "1000", int),
      temperature=_number("GEMINI_TEMPERATURE", "0.7", float),
      timeout_seconds=_number("GEMINI_TIMEOUT_SECONDS", "30", float),
      log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
