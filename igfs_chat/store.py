from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

MAX_TURNS = 20


class SessionState(str, Enum):
  FRESH = "fresh"
  ACTIVE = "active"


@dataclass
class Turn:
  role: str  # user|model
  text: str


@dataclass
class Session:
  session_id: str
  turns: List[Turn] = field(default_factory=list)
  state: SessionState = SessionState.FRESH
  lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

  @property
  def is_fresh(self) -> bool:
    return self.state is SessionState.FRESH


class SessionStore:
  """In-memory conversation history keyed by session id.

  Each session keeps a sliding window of its most recent turns. Sessions live
  until they are cleared or the process exits.
  """

  def __init__(self, max_turns: int = MAX_TURNS) -> None:
    self._sessions: Dict[str, Session] = {}
    self._max_turns = max_turns

  @property
  def max_turns(self) -> int:
    return self._max_turns

  def get_or_create(self, session_id: str) -> Session:
    session = self._sessions.get(session_id)
    if session is None:
      session = Session(session_id=session_id)
      self._sessions[session_id] = session
    return session

  def append_exchange(
    self,
    session_id: str,
    user_text: str,
    model_text: str,
    expected: Optional[Session] = None,
  ) -> bool:
    """Record one user/model exchange and trim to the window.

    With ``expected``, nothing is recorded (returns False) unless the stored
    session is still that object, so a clear made mid-exchange wins.
    """
    if expected is not None and self._sessions.get(session_id) is not expected:
      return False
    session = self.get_or_create(session_id)
    session.turns.append(Turn(role="user", text=user_text))
    session.turns.append(Turn(role="model", text=model_text))
    if len(session.turns) > self._max_turns:
      session.turns = session.turns[-self._max_turns :]
    session.state = SessionState.ACTIVE
    return True

  def history(self, session_id: str) -> List[Turn]:
    session = self._sessions.get(session_id)
    if session is None:
      return []
    return list(session.turns)

  def lock(self, session_id: str) -> asyncio.Lock:
    return self.get_or_create(session_id).lock

  def clear(self, session_id: str) -> None:
    self._sessions.pop(session_id, None)

  def __contains__(self, session_id: object) -> bool:
    return session_id in self._sessions

  def __len__(self) -> int:
    return len(self._sessions)
