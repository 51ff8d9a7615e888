from __future__ import annotations

import datetime
from collections import deque
from collections.abc import Iterator

from medroute.models import ConversationTurn

DEFAULT_CAPACITY = 10
PROMPT_WINDOW = 3


class HistoryLog:
    """Bounded FIFO log of completed exchanges.

    Once ``capacity`` turns are stored, each append evicts the oldest one.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._turns: deque[ConversationTurn] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._turns.maxlen or 0

    def append(self, turn: ConversationTurn) -> None:
        self._turns.append(turn)

    def record(self, user: str, assistant: str) -> ConversationTurn:
        """Build a timestamped turn and append it."""
        turn = ConversationTurn(
            user=user,
            assistant=assistant,
            timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        )
        self.append(turn)
        return turn

    def recent(self, n: int) -> list[ConversationTurn]:
        """Return the last ``n`` turns in chronological order."""
        if n <= 0:
            return []
        return list(self._turns)[-n:]

    def clear(self) -> None:
        self._turns.clear()

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(list(self._turns))
