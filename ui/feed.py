"""CORTEX message feed.

The feed is the side panel where CORTEX narrates what is happening. When the
player mutes hints, routine messages are hidden while alerts and critical
messages always show.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from config.settings import GameSettings

DEFAULT_MAX_ENTRIES = 200


class Severity(str, Enum):
    NORMAL = "normal"
    ALERT = "alert"
    CRITICAL = "critical"


@dataclass(frozen=True)
class FeedEntry:
    text: str
    severity: Severity = Severity.NORMAL


class CortexFeed:
    """Rolling buffer of CORTEX messages."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.max_entries = max_entries
        self._entries: List[FeedEntry] = []

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "CortexFeed":
        return cls(max_entries=settings.feed_max_entries)

    def add(self, text: str, severity: Severity | str = Severity.NORMAL) -> FeedEntry:
        entry = FeedEntry(text=text, severity=Severity(severity))
        self._entries.append(entry)
        # Keep only the last N entries
        if len(self._entries) > self.max_entries:
            del self._entries[: -self.max_entries]
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[FeedEntry]:
        return list(self._entries)

    def visible_entries(self, hints_enabled: bool) -> List[FeedEntry]:
        if hints_enabled:
            return list(self._entries)
        return [entry for entry in self._entries if entry.severity is not Severity.NORMAL]

    def __len__(self) -> int:
        return len(self._entries)
