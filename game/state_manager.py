"""Per-session engine registry.

Each player session owns exactly one ``CaseEngine``. The registry is an
ordinary object handed to whoever serves sessions; there is no module-level
store to import.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from config.settings import GameSettings
from game.catalog import CaseCatalog
from game.engine import CaseEngine
from game.errors import CatalogError

logger = logging.getLogger(__name__)


class SessionStore:
    """Maps session ids to their engines. All sessions share one catalog."""

    def __init__(self, catalog: Optional[CaseCatalog], settings: Optional[GameSettings] = None):
        if catalog is None:
            raise CatalogError("No case catalog loaded; cannot serve sessions")
        self.catalog = catalog
        self.settings = settings or GameSettings()
        self._engines: Dict[str, CaseEngine] = {}

    def get(self, session_id: str) -> Optional[CaseEngine]:
        return self._engines.get(session_id)

    def get_or_create(self, session_id: str) -> CaseEngine:
        """Get or create the engine for a session."""
        engine = self._engines.get(session_id)
        if engine is None:
            engine = CaseEngine(self.catalog, self.settings)
            self._engines[session_id] = engine
            logger.info("Created game for session %s", session_id)
        return engine

    def restart(self, session_id: str) -> CaseEngine:
        """Start the session's game over from scratch."""
        engine = self.get_or_create(session_id)
        engine.reset_game_state()
        return engine

    def drop(self, session_id: str) -> bool:
        """Forget a session. Returns False if it was not known."""
        if self._engines.pop(session_id, None) is None:
            return False
        logger.info("Dropped game for session %s", session_id)
        return True

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._engines

    def __len__(self) -> int:
        return len(self._engines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._engines))
