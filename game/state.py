"""Game state for one playthrough."""

from typing import Dict, List, Optional, Set

from game.catalog import CaseCatalog
from game.dialogue import DialogueContext, IntroContext
from game.models import Accusation, EndingKey, GamePhase, Score


class GameState:
    """The single mutable record of a player's progress.

    Treat it as read-only outside ``CaseEngine``: every change goes through a
    named engine operation. A restart builds a new instance rather than
    clearing this one.
    """

    def __init__(self, critical_clues_total: int, hints_enabled: bool = True):
        self.phase: GamePhase = GamePhase.INTRO

        # Location tracking
        self.current_location_id: Optional[str] = None
        self.previous_location_id: Optional[str] = None
        self.visited_location_ids: List[str] = []  # unique, in visit order

        # Evidence, in discovery order (the notebook shows them this way)
        self.discovered_clue_ids: List[str] = []

        # One-shot location actions taken this run
        self.lab_actions_used: Set[str] = set()

        # Ad hoc narrative switches; absent means False
        self.flags: Dict[str, bool] = {}

        self.dialogue_context: DialogueContext = IntroContext()

        # Interview progress
        self.suspect_intro_seen: Dict[str, bool] = {}
        self.unlocked_topics: Dict[str, List[str]] = {}

        self.cortex_hints_enabled: bool = hints_enabled

        self.accusation: Accusation = Accusation()
        self.ending_key: Optional[EndingKey] = None
        self.score: Score = Score(critical_clues_total=critical_clues_total)

    @classmethod
    def initial(cls, catalog: CaseCatalog, hints_enabled: bool = True) -> "GameState":
        """Fresh state for a new game, using catalog defaults."""
        state = cls(critical_clues_total=catalog.critical_clue_total, hints_enabled=hints_enabled)
        for suspect in catalog.suspects:
            state.suspect_intro_seen[suspect.id] = False
            state.unlocked_topics[suspect.id] = []
        return state

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.ENDING

    def to_summary(self) -> dict:
        """Plain-dict snapshot for logging and debug panels."""
        return {
            "phase": self.phase.value,
            "current_location_id": self.current_location_id,
            "previous_location_id": self.previous_location_id,
            "visited_location_ids": list(self.visited_location_ids),
            "discovered_clue_ids": list(self.discovered_clue_ids),
            "lab_actions_used": sorted(self.lab_actions_used),
            "flags": dict(self.flags),
            "dialogue": {
                "kind": self.dialogue_context.kind.value,
                "target_id": self.dialogue_context.target_id,
                "index": self.dialogue_context.index,
            },
            "cortex_hints_enabled": self.cortex_hints_enabled,
            "accusation": self.accusation.model_dump(),
            "ending_key": self.ending_key.value if self.ending_key else None,
            "score": self.score.model_dump(),
        }
