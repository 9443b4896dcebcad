"""State mutators for a CORTEX playthrough.

``CaseEngine`` owns one ``GameState`` and is the only thing allowed to change
it. The presentation layer calls these methods in response to player input
and re-renders from ``get_state()`` afterwards; the engine never calls back
into rendering.

Unknown ids are not exceptions here. They are logged and the operation
returns a sentinel (``None``, ``ClueStatus.NOT_FOUND`` or
``DialogueOutcome.END``) without touching the state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from config.settings import GameSettings
from game.catalog import CaseCatalog
from game.dialogue import (
    DialogueContext,
    DialogueOutcome,
    EndingContext,
    IntroContext,
    LocationContext,
    SuspectContext,
    make_context,
    resolve_lines,
    with_index,
)
from game.errors import CatalogError
from game.evaluator import evaluate
from game.models import (
    Accusation,
    Clue,
    DialogueLine,
    Evaluation,
    GamePhase,
    LabAction,
    Location,
    Motive,
    StoryFlag,
    Suspect,
)
from game.state import GameState

logger = logging.getLogger(__name__)


# ============================================================================
# Operation results
# ============================================================================


@dataclass(frozen=True)
class VisitResult:
    location: Location
    is_first_visit: bool


@dataclass(frozen=True)
class InterviewResult:
    suspect: Suspect
    is_first_interview: bool


class ClueStatus(str, Enum):
    DISCOVERED = "discovered"
    ALREADY_KNOWN = "already_known"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ClueDiscovery:
    status: ClueStatus
    clue: Optional[Clue] = None

    @property
    def is_new(self) -> bool:
        return self.status is ClueStatus.DISCOVERED


@dataclass(frozen=True)
class LabActionResult:
    action: LabAction
    already_used: bool = False
    revealed_clues: List[Clue] = field(default_factory=list)


class DiscoveredClues:
    """Discovered clues in discovery order.

    Lazy and restartable: every iteration reads the engine's current state,
    so a handle kept across a restart shows the new, empty notebook.
    """

    def __init__(self, engine: CaseEngine):
        self._engine = engine

    def _clue_ids(self) -> List[str]:
        return self._engine.get_state().discovered_clue_ids

    def __iter__(self) -> Iterator[Clue]:
        for clue_id in list(self._clue_ids()):
            clue = self._engine.catalog.find_clue_by_id(clue_id)
            if clue is not None:
                yield clue

    def __len__(self) -> int:
        return len(self._clue_ids())

    def __bool__(self) -> bool:
        return bool(self._clue_ids())


def _flag_key(name) -> str:
    if isinstance(name, StoryFlag):
        return name.value
    try:
        return StoryFlag(name).value
    except ValueError:
        logger.debug("Using unregistered story flag '%s'", name)
        return name


class CaseEngine:
    """Owns the game state for one playthrough and every way to change it."""

    def __init__(self, catalog: Optional[CaseCatalog], settings: Optional[GameSettings] = None):
        if catalog is None:
            raise CatalogError("No case catalog loaded; cannot start a game")
        self.catalog = catalog
        self.settings = settings or GameSettings()
        self._state = self._new_state()

    def _new_state(self) -> GameState:
        return GameState.initial(self.catalog, hints_enabled=self.settings.hints_enabled)

    # =========================================================================
    # State access
    # =========================================================================

    def get_state(self) -> GameState:
        """Return the live state. Callers must not modify it directly."""
        return self._state

    def reset_game_state(self) -> GameState:
        """Throw away all progress and start over from catalog defaults."""
        self._state = self._new_state()
        logger.info("Game state reset for case '%s'", self.catalog.metadata.id)
        return self._state

    # =========================================================================
    # Catalog lookups
    # =========================================================================

    def find_location_by_id(self, location_id: Optional[str]) -> Optional[Location]:
        return self.catalog.find_location_by_id(location_id)

    def find_suspect_by_id(self, suspect_id: Optional[str]) -> Optional[Suspect]:
        return self.catalog.find_suspect_by_id(suspect_id)

    def find_motive_by_id(self, motive_id: Optional[str]) -> Optional[Motive]:
        return self.catalog.find_motive_by_id(motive_id)

    def find_clue_by_id(self, clue_id: Optional[str]) -> Optional[Clue]:
        return self.catalog.find_clue_by_id(clue_id)

    # =========================================================================
    # Phase & location
    # =========================================================================

    def set_phase(self, phase) -> bool:
        """Move to another phase. Entering INTRO rewinds to the intro briefing.

        An ending only exists while the phase is ENDING, so leaving it drops
        the ending key (the score is kept for the accusation form).
        """
        try:
            phase = GamePhase(phase)
        except ValueError:
            logger.warning("Attempted to set unknown phase %r", phase)
            return False
        if phase is GamePhase.ENDING and self._state.ending_key is None:
            logger.warning("Cannot enter the ending phase before an accusation is evaluated")
            return False

        self._state.phase = phase
        if phase is not GamePhase.ENDING:
            self._state.ending_key = None
        if phase is GamePhase.INTRO:
            self._state.dialogue_context = IntroContext()
        return True

    def visit_location(self, location_id: str) -> Optional[VisitResult]:
        """Move the player to a location and point the dialogue at its script."""
        location = self.catalog.find_location_by_id(location_id)
        if location is None:
            logger.warning("Unknown location_id '%s'", location_id)
            return None

        state = self._state
        state.previous_location_id = state.current_location_id
        state.current_location_id = location_id

        is_first_visit = location_id not in state.visited_location_ids
        if is_first_visit:
            state.visited_location_ids.append(location_id)

        state.dialogue_context = LocationContext(location_id=location_id, repeat=not is_first_visit)
        logger.debug("Visited '%s' (first visit: %s)", location_id, is_first_visit)
        return VisitResult(location=location, is_first_visit=is_first_visit)

    def has_visited_location(self, location_id: str) -> bool:
        return location_id in self._state.visited_location_ids

    def start_investigation(self) -> Optional[VisitResult]:
        """Leave the briefing and drop the player at the starting location."""
        self.set_phase(GamePhase.INVESTIGATION)
        start_id = self.settings.starting_location_id or self.catalog.locations[0].id
        result = self.visit_location(start_id)
        if result is None and start_id != self.catalog.locations[0].id:
            logger.warning("Starting location '%s' not in catalog, using default", start_id)
            result = self.visit_location(self.catalog.locations[0].id)
        return result

    # =========================================================================
    # Clues
    # =========================================================================

    def discover_clue(self, clue_id: str) -> ClueDiscovery:
        """Add a clue to the notebook. Discovering a known clue is a no-op."""
        clue = self.catalog.find_clue_by_id(clue_id)
        if clue is None:
            logger.warning("Unknown clue_id '%s'", clue_id)
            return ClueDiscovery(ClueStatus.NOT_FOUND)

        if clue_id in self._state.discovered_clue_ids:
            return ClueDiscovery(ClueStatus.ALREADY_KNOWN, clue)

        self._state.discovered_clue_ids.append(clue_id)
        logger.info("Clue discovered: %s", clue_id)
        return ClueDiscovery(ClueStatus.DISCOVERED, clue)

    def has_clue(self, clue_id: str) -> bool:
        return clue_id in self._state.discovered_clue_ids

    def list_discovered_clues(self) -> DiscoveredClues:
        return DiscoveredClues(self)

    def reveal_next_critical_clue(self) -> Optional[Clue]:
        """Discover the first missing critical clue, in solution order.

        Returns None when every critical clue is already in the notebook.
        """
        for clue_id in self.catalog.solution.critical_clue_ids:
            if clue_id not in self._state.discovered_clue_ids:
                return self.discover_clue(clue_id).clue
        return None

    # =========================================================================
    # Suspects & topics
    # =========================================================================

    def mark_suspect_intro_seen(self, suspect_id: str) -> None:
        if suspect_id not in self._state.suspect_intro_seen:
            logger.warning("Unknown suspect_id '%s' in intro tracking", suspect_id)
            return
        self._state.suspect_intro_seen[suspect_id] = True

    def is_suspect_intro_seen(self, suspect_id: str) -> bool:
        return self._state.suspect_intro_seen.get(suspect_id, False)

    def unlock_suspect_topic(self, suspect_id: str, topic_id: str) -> None:
        topics = self._state.unlocked_topics.get(suspect_id)
        if topics is None:
            logger.warning("Unknown suspect_id '%s' in topic unlock", suspect_id)
            return
        if topic_id not in topics:
            topics.append(topic_id)

    def unlocked_topics_for(self, suspect_id: str) -> List[str]:
        return list(self._state.unlocked_topics.get(suspect_id, []))

    def interview_suspect(self, suspect_id: str) -> Optional[InterviewResult]:
        """Open an interview: dialogue switches to the suspect's intro lines."""
        suspect = self.catalog.find_suspect_by_id(suspect_id)
        if suspect is None:
            logger.warning("Unknown suspect_id '%s'", suspect_id)
            return None

        is_first_interview = not self.is_suspect_intro_seen(suspect_id)
        self.mark_suspect_intro_seen(suspect_id)
        self._state.dialogue_context = SuspectContext(suspect_id=suspect_id)
        return InterviewResult(suspect=suspect, is_first_interview=is_first_interview)

    def ask_topic(self, suspect_id: str, topic_id: str) -> Optional[DialogueLine]:
        """Pursue a line of questioning. Returns its first line."""
        script = self.catalog.suspect_dialogue.get(suspect_id)
        if script is None or topic_id not in script.topics:
            logger.warning("Suspect '%s' has no topic '%s'", suspect_id, topic_id)
            return None

        self.unlock_suspect_topic(suspect_id, topic_id)
        self._state.dialogue_context = SuspectContext(suspect_id=suspect_id, topic_id=topic_id)
        return self.current_dialogue_line()

    # =========================================================================
    # Lab actions
    # =========================================================================

    def mark_lab_action_used(self, action_id: str) -> None:
        self._state.lab_actions_used.add(action_id)

    def is_lab_action_used(self, action_id: str) -> bool:
        return action_id in self._state.lab_actions_used

    def perform_lab_action(self, action_id: str) -> Optional[LabActionResult]:
        """Take a one-shot location action. Each action works once per run."""
        action = self.catalog.find_lab_action_by_id(action_id)
        if action is None:
            logger.warning("Unknown lab action '%s'", action_id)
            return None
        if self._state.current_location_id != action.location_id:
            logger.warning(
                "Lab action '%s' needs location '%s', player is at '%s'",
                action_id,
                action.location_id,
                self._state.current_location_id,
            )
            return None
        if self.is_lab_action_used(action_id):
            return LabActionResult(action=action, already_used=True)

        self.mark_lab_action_used(action_id)
        revealed = []
        if action.reveals_clue_id:
            discovery = self.discover_clue(action.reveals_clue_id)
            if discovery.is_new:
                revealed.append(discovery.clue)
        if action.sets_flag:
            self.set_flag(action.sets_flag)
        if action.reveals_next_critical:
            clue = self.reveal_next_critical_clue()
            if clue is not None:
                revealed.append(clue)
        return LabActionResult(action=action, revealed_clues=revealed)

    # =========================================================================
    # Flags & CORTEX behaviour
    # =========================================================================

    def set_flag(self, name, value: bool = True) -> None:
        self._state.flags[_flag_key(name)] = bool(value)

    def get_flag(self, name) -> bool:
        return self._state.flags.get(_flag_key(name), False)

    def clear_flag(self, name) -> None:
        self._state.flags.pop(_flag_key(name), None)

    def toggle_cortex_hints(self) -> bool:
        self._state.cortex_hints_enabled = not self._state.cortex_hints_enabled
        return self._state.cortex_hints_enabled

    # =========================================================================
    # Dialogue cursor
    # =========================================================================

    def set_dialogue_context(
        self,
        kind,
        target_id: Optional[str] = None,
        index: int = 0,
        topic_id: Optional[str] = None,
    ) -> None:
        """Point the dialogue cursor somewhere, without checking a script exists."""
        if index < 0:
            logger.warning("Negative dialogue index %d, starting from 0", index)
            index = 0
        try:
            context = make_context(kind, target_id, index, topic_id)
        except ValueError:
            logger.warning("Unknown dialogue context kind %r", kind)
            return
        self._state.dialogue_context = context

    def current_dialogue_line(self) -> Optional[DialogueLine]:
        context = self._state.dialogue_context
        lines = resolve_lines(self.catalog, context)
        if not lines or not 0 <= context.index < len(lines):
            return None
        return lines[context.index]

    def advance_dialogue_index(self) -> DialogueOutcome:
        """Step to the next line of the active script.

        Reports CONTINUE after moving forward and END when already on the last
        line, when the script is empty, or when the context cannot be resolved.
        """
        context: DialogueContext = self._state.dialogue_context
        lines = resolve_lines(self.catalog, context)
        if not lines:
            return DialogueOutcome.END

        next_index = context.index + 1
        if next_index < len(lines):
            self._state.dialogue_context = with_index(context, next_index)
            return DialogueOutcome.CONTINUE
        return DialogueOutcome.END

    # =========================================================================
    # Accusation & evaluation
    # =========================================================================

    def set_accusation(
        self,
        suspect_id: Optional[str] = None,
        motive_id: Optional[str] = None,
        evidence_id: Optional[str] = None,
    ) -> Accusation:
        """Record the player's final accusation. Unknown ids are kept but logged."""
        if suspect_id and self.catalog.find_suspect_by_id(suspect_id) is None:
            logger.warning("set_accusation received unknown suspect_id '%s'", suspect_id)
        if motive_id and self.catalog.find_motive_by_id(motive_id) is None:
            logger.warning("set_accusation received unknown motive_id '%s'", motive_id)
        if evidence_id and self.catalog.find_clue_by_id(evidence_id) is None:
            logger.warning("set_accusation received unknown evidence_id '%s'", evidence_id)

        self._state.accusation = Accusation(
            suspect_id=suspect_id, motive_id=motive_id, evidence_id=evidence_id
        )
        return self._state.accusation

    def evaluate_accusation(self) -> Evaluation:
        """Score the accusation, pick the ending and move to the ENDING phase."""
        state = self._state
        if (
            not self.settings.allow_reevaluation
            and state.phase is GamePhase.ENDING
            and state.ending_key is not None
        ):
            logger.info("Case already closed as '%s'; keeping the result", state.ending_key.value)
            return Evaluation(score=state.score.model_copy(), ending_key=state.ending_key)

        result = evaluate(state.accusation, state.discovered_clue_ids, self.catalog.solution)
        state.score = result.score.model_copy()
        state.ending_key = result.ending_key
        state.phase = GamePhase.ENDING
        state.dialogue_context = EndingContext(ending_key=result.ending_key.value)

        logger.info(
            "Accusation evaluated: %s (culprit=%s motive=%s critical=%d/%d)",
            result.ending_key.value,
            result.score.culprit_correct,
            result.score.motive_correct,
            result.score.critical_clues_found,
            result.score.critical_clues_total,
        )
        logger.debug("State after evaluation: %s", state.to_summary())
        return result
