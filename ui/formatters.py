"""UI formatting functions for displaying case progress as HTML.

These only read from the engine. They build the fragments a front end drops
into its panels: the ending screen, the notebook and the accusation form.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from game.engine import CaseEngine
from game.evaluator import format_confidence
from game.models import DialogueLine, EndingKey, Score, StoryFlag

logger = logging.getLogger(__name__)

EMPTY_NOTEBOOK_TEXT = (
    "No formal clues logged yet. Explore each location and watch CORTEX for anomalies."
)
SUSPECT_LOCKED_HINT = "CORTEX confidence high: culprit locked. Refine motive and key evidence."

ENDING_TITLES = {
    EndingKey.PERFECT: "Case Closed: Perfect Reconstruction",
    EndingKey.CLOSE: "Case Mostly Solved",
    EndingKey.WRONG: "Case Unresolved",
}

ENDING_TAGLINES = {
    EndingKey.PERFECT: (
        "Suspect, motive, and all critical clues aligned. "
        "CORTEX marks this run as a clean reference pattern."
    ),
    EndingKey.CLOSE: (
        "You caught the right shadow, but some variables stayed fuzzy. "
        "Another pass might lock it in."
    ),
    EndingKey.WRONG: (
        "Your accusation conflicts with too much of the evidence. "
        "Officially closed, but the pattern persists."
    ),
}

# Perfect run, but the player pushed CORTEX through the unsanctioned scan
FORBIDDEN_SCAN_TAGLINE = (
    "Suspect, motive, and all critical clues aligned, but you pushed CORTEX past its safe "
    "limits. This run is logged as both a reference pattern and a cautionary tale."
)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def format_score_breakdown(score: Score) -> str:
    """One-line performance summary, e.g. for the ending screen or the feed."""
    return (
        f"Culprit correct: {_yes_no(score.culprit_correct)} • "
        f"Motive correct: {_yes_no(score.motive_correct)} • "
        f"Critical clues: {score.critical_clues_found}/{score.critical_clues_total}"
    )


def format_dialogue_line(line: Optional[DialogueLine]) -> str:
    if line is None:
        return ""
    return f"**{line.speaker}:** {line.text}"


def topic_options(engine: CaseEngine, suspect_id: str) -> List[Tuple[str, str]]:
    """Topic buttons for an interview as (topic_id, label) pairs.

    Topics already asked about are marked so the player can tell them apart.
    """
    script = engine.catalog.suspect_dialogue.get(suspect_id)
    if script is None:
        return []
    asked = set(engine.unlocked_topics_for(suspect_id))
    options = []
    for topic_id in script.topics:
        label = engine.catalog.topic_label(topic_id)
        if topic_id in asked:
            label = f"{label} (asked)"
        options.append((topic_id, label))
    return options


def format_ending_summary(engine: CaseEngine) -> str:
    """Format the ending screen. Empty until the case has been evaluated."""
    state = engine.get_state()
    if not state.is_over or state.ending_key is None:
        return ""

    ending_key = state.ending_key
    title = ENDING_TITLES[ending_key]
    tagline = ENDING_TAGLINES[ending_key]
    if ending_key is EndingKey.PERFECT and engine.get_flag(StoryFlag.LAB_FORBIDDEN_SCAN_USED):
        tagline = FORBIDDEN_SCAN_TAGLINE

    score = state.score
    return f"""
    <div class="ending-screen ending-{ending_key.value}">
        <div class="ending-title">{title}</div>
        <div class="ending-tagline">{tagline}</div>
        <div class="ending-breakdown">{format_score_breakdown(score)}</div>
        <div class="ending-confidence">CORTEX confidence: {format_confidence(score)}</div>
        <p class="ending-details__hint">
            Try a different path through the Lab, Server Vault, and Rooftop to see how the pattern shifts.
        </p>
    </div>
    """


def format_notebook_html(engine: CaseEngine) -> str:
    """Format the notebook: discovered clues first, then every suspect."""
    clues = list(engine.list_discovered_clues())
    if clues:
        clue_cards = "".join(
            f"""
            <div class="notebook-card" data-clue-id="{clue.id}">
                <h4>{clue.name}</h4>
                <p>{clue.detail}</p>
                <p><strong>Tags:</strong> {", ".join(sorted(clue.tags))}</p>
            </div>"""
            for clue in clues
        )
    else:
        clue_cards = f'<p class="notebook-empty">{EMPTY_NOTEBOOK_TEXT}</p>'

    suspect_cards = "".join(
        f"""
        <div class="notebook-card" data-suspect-id="{suspect.id}">
            <h4>{suspect.name}</h4>
            <p><strong>Role:</strong> {suspect.role}</p>
            <p><strong>Relation:</strong> {suspect.relationship_to_victim}</p>
            <p>{suspect.initial_impression}</p>
        </div>"""
        for suspect in engine.catalog.suspects
    )

    return f"""
    <div class="notebook">
        <div class="notebook-section notebook-clues">{clue_cards}</div>
        <div class="notebook-section notebook-suspects">{suspect_cards}</div>
    </div>
    """


@dataclass
class AccusationOptions:
    """Choices for the accusation form."""

    suspects: List[Tuple[str, str]] = field(default_factory=list)
    motives: List[Tuple[str, str]] = field(default_factory=list)
    evidence: List[Tuple[str, str]] = field(default_factory=list)
    suspect_locked: bool = False
    locked_suspect_id: Optional[str] = None
    lock_hint: str = ""


def accusation_options(engine: CaseEngine) -> AccusationOptions:
    """Build the accusation form choices.

    Evidence is limited to clues in the notebook. After an evaluation that got
    the culprit right but missed critical clues, the suspect field is locked so
    the player refines motive and evidence instead.
    """
    state = engine.get_state()
    options = AccusationOptions(
        suspects=[(s.id, s.name) for s in engine.catalog.suspects],
        motives=[(m.id, m.label) for m in engine.catalog.motives],
        evidence=[(c.id, c.name) for c in engine.list_discovered_clues()],
    )

    score = state.score
    if score.culprit_correct and score.critical_clues_found < score.critical_clues_total:
        options.suspect_locked = True
        options.locked_suspect_id = state.accusation.suspect_id
        options.lock_hint = SUSPECT_LOCKED_HINT
        logger.debug("Accusation suspect locked to %s", options.locked_suspect_id)
    return options
