from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional

from shared.utils import generate_exchange_id

from .messages import Message


class ExchangeState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    AWAITING_PEER = "awaiting_peer"
    COMPLETE = "complete"
    FAILED = "failed"


# Client: IDLE -> SENDING -> AWAITING_PEER -> COMPLETE
# Server: IDLE -> AWAITING_PEER -> SENDING -> COMPLETE
_TRANSITIONS: Dict[ExchangeState, FrozenSet[ExchangeState]] = {
    ExchangeState.IDLE: frozenset({ExchangeState.SENDING, ExchangeState.AWAITING_PEER, ExchangeState.FAILED}),
    ExchangeState.SENDING: frozenset({ExchangeState.AWAITING_PEER, ExchangeState.COMPLETE, ExchangeState.FAILED}),
    ExchangeState.AWAITING_PEER: frozenset({ExchangeState.SENDING, ExchangeState.COMPLETE, ExchangeState.FAILED}),
    ExchangeState.COMPLETE: frozenset(),
    ExchangeState.FAILED: frozenset(),
}


@dataclass
class ExchangeContext:
    """Bookkeeping for one request/response exchange on one endpoint."""

    peername: str
    role: str
    exchange_id: str = field(default_factory=generate_exchange_id)
    state: ExchangeState = ExchangeState.IDLE
    request: Optional[Message] = None
    response: Optional[Message] = None
    error: Optional[Exception] = None
    started_at: float = field(default_factory=time.time)
    finished_at: Optional[float] = None

    def advance(self, state: ExchangeState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal exchange transition {self.state.value} -> {state.value}")
        self.state = state
        if self.is_finished():
            self.finished_at = time.time()

    def fail(self, exc: Exception) -> None:
        if self.is_finished():
            return
        self.error = exc
        self.advance(ExchangeState.FAILED)

    def is_finished(self) -> bool:
        return self.state in (ExchangeState.COMPLETE, ExchangeState.FAILED)

    @property
    def duration(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return self.finished_at - self.started_at
