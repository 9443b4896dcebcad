"""Event handlers for a CORTEX front end.

Each handler takes the session's engine and CORTEX feed, applies one player
input and narrates it in the feed. Rendering is left to the caller, which
re-reads the engine state afterwards.
"""

import logging
from typing import Optional

from game.dialogue import DialogueOutcome
from game.engine import CaseEngine, ClueDiscovery, InterviewResult, LabActionResult, VisitResult
from game.models import Clue, DialogueLine, Evaluation, StoryFlag
from ui.feed import CortexFeed, Severity
from ui.formatters import format_score_breakdown

logger = logging.getLogger(__name__)


def _form_value(value: Optional[str]) -> Optional[str]:
    """Empty form selections arrive as ''; treat them as unset."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def on_app_load(engine: CaseEngine, feed: CortexFeed) -> None:
    engine.reset_game_state()
    feed.add("CORTEX online. Awaiting your decision to begin the investigation.")


def on_begin_investigation(engine: CaseEngine, feed: CortexFeed) -> Optional[VisitResult]:
    result = engine.start_investigation()
    labels = ", ".join(location.short_label for location in engine.catalog.locations)
    feed.add(f"Investigation initialized. Locations unlocked: {labels}.")
    return result


def on_go_to_location(engine: CaseEngine, feed: CortexFeed, location_id: str) -> Optional[VisitResult]:
    if not location_id:
        return None
    result = engine.visit_location(location_id)
    if result is not None and result.is_first_visit:
        feed.add(f"New location visited: {result.location.name}. Observing environment...")
    return result


def on_advance_dialogue(engine: CaseEngine) -> DialogueOutcome:
    # On END the last line simply stays on screen
    return engine.advance_dialogue_index()


def on_examine_clue(engine: CaseEngine, feed: CortexFeed, clue_id: str) -> ClueDiscovery:
    discovery = engine.discover_clue(clue_id)
    if discovery.is_new:
        feed.add(f"New clue logged: {discovery.clue.name}. {discovery.clue.summary}")
    return discovery


def on_interview_suspect(
    engine: CaseEngine, feed: CortexFeed, suspect_id: str
) -> Optional[InterviewResult]:
    result = engine.interview_suspect(suspect_id)
    if result is not None and result.is_first_interview:
        feed.add(f"Interview opened with {result.suspect.name}, {result.suspect.role}.")
    return result


def on_ask_topic(engine: CaseEngine, suspect_id: str, topic_id: str) -> Optional[DialogueLine]:
    return engine.ask_topic(suspect_id, topic_id)


def on_lab_action(engine: CaseEngine, feed: CortexFeed, action_id: str) -> Optional[LabActionResult]:
    result = engine.perform_lab_action(action_id)
    if result is None:
        return None
    if result.already_used:
        feed.add(f"'{result.action.label}' has already been used this run.", Severity.ALERT)
        return result

    if result.action.sets_flag is StoryFlag.LAB_FORBIDDEN_SCAN_USED:
        feed.add("Unsanctioned deep scan authorized. This will be logged.", Severity.ALERT)
    for clue in result.revealed_clues:
        feed.add(f"New clue logged: {clue.name}. {clue.summary}")
    if not result.revealed_clues:
        feed.add("Scan complete. Nothing new surfaced.")
    return result


def on_request_hint(engine: CaseEngine, feed: CortexFeed) -> Optional[Clue]:
    clue = engine.reveal_next_critical_clue()
    if clue is None:
        feed.add("Every critical lead is already in your notebook.")
    else:
        feed.add(f"CORTEX surfaces a critical lead: {clue.name}.", Severity.ALERT)
    return clue


def on_toggle_hints(engine: CaseEngine, feed: CortexFeed) -> bool:
    enabled = engine.toggle_cortex_hints()
    if enabled:
        feed.add("CORTEX hints enabled.")
    else:
        feed.add("CORTEX hints muted.", Severity.ALERT)
    return enabled


def on_restart_case(engine: CaseEngine, feed: CortexFeed) -> None:
    engine.reset_game_state()
    feed.add("Case reset. Returning to briefing.", Severity.ALERT)


def on_submit_accusation(
    engine: CaseEngine,
    feed: CortexFeed,
    suspect_id: Optional[str],
    motive_id: Optional[str],
    evidence_id: Optional[str],
) -> Evaluation:
    engine.set_accusation(
        suspect_id=_form_value(suspect_id),
        motive_id=_form_value(motive_id),
        evidence_id=_form_value(evidence_id),
    )
    result = engine.evaluate_accusation()
    feed.add(
        f"Accusation recorded. Evaluating evidence... Outcome tier: {result.ending_key.value}.",
        Severity.CRITICAL,
    )
    feed.add(format_score_breakdown(result.score))
    return result
