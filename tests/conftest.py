from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from igfs_chat.gemini_client import ProviderError
from igfs_chat.main import create_app
from igfs_chat.store import SessionStore, Turn


class StubProvider:
  """Records every outgoing call and answers with canned replies."""

  def __init__(self, reply: str = "stub reply") -> None:
    self.reply = reply
    self.error: Optional[Exception] = None
    self.calls: List[Tuple[List[Turn], str]] = []

  async def generate(self, history: Sequence[Turn], message: str) -> str:
    self.calls.append((list(history), message))
    if self.error is not None:
      raise self.error
    return self.reply

  def fail_with(self, message: str) -> None:
    self.error = ProviderError(message)


@pytest.fixture
def provider() -> StubProvider:
  return StubProvider()


@pytest.fixture
def store() -> SessionStore:
  return SessionStore()


@pytest.fixture
def client(provider: StubProvider, store: SessionStore) -> TestClient:
  return TestClient(create_app(provider, store, ["https://igsofficial25.com"]))
