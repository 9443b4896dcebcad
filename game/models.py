"""Data models for the CORTEX case.

Catalog models are frozen: the case content never changes while the game is
running. Progress lives in ``game.state.GameState``.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class GamePhase(str, Enum):
    """Coarse-grained screens the game moves through."""

    INTRO = "intro"
    INVESTIGATION = "investigation"
    DEDUCTION = "deduction"
    ACCUSATION = "accusation"
    ENDING = "ending"


class EndingKey(str, Enum):
    """Outcome tier of an evaluated accusation."""

    PERFECT = "perfect"
    CLOSE = "close"
    WRONG = "wrong"


class SpeakerType(str, Enum):
    AI = "ai"
    PLAYER = "player"
    NPC = "npc"


class StoryFlag(str, Enum):
    """Known narrative switches.

    ``CaseEngine.set_flag`` also accepts arbitrary strings so new content can
    branch without a code change, but anything read by the engine or the
    formatters must be listed here.
    """

    LAB_FORBIDDEN_SCAN_USED = "lab_forbidden_scan_used"
    CORTEX_MEMORY_PROBED = "cortex_memory_probed"


# =============================================================================
# CATALOG
# =============================================================================


class CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class GameMetadata(CatalogModel):
    """High-level information about the case, for About dialogs and logs."""

    id: str
    title: str
    estimated_play_time_minutes: str
    difficulty: str
    description: str


class Location(CatalogModel):
    """A place the player can visit during the investigation."""

    id: str
    name: str
    short_label: str = Field(description="Compact label for buttons")
    scene_description: str


class Suspect(CatalogModel):
    """A person of interest and how they connect to the case."""

    id: str
    name: str
    role: str
    relationship_to_victim: str
    initial_impression: str = Field(description="Shown the first time the player meets them")
    public_story: str = Field(description="What they tell everyone")
    private_angle: str = Field(description="What deeper questioning might uncover")


class Motive(CatalogModel):
    """How the player frames the 'why' in the final accusation."""

    id: str
    label: str
    description: str


class Clue(CatalogModel):
    """A discoverable piece of evidence."""

    id: str
    name: str
    location_id: str = Field(description="Where the clue is first found")
    summary: str
    detail: str
    tags: FrozenSet[str] = frozenset()
    is_critical: bool = Field(
        default=False,
        description="Part of the intended correct-deduction path",
    )


class CaseSolution(CatalogModel):
    """Hidden ground truth. Only the evaluator looks at it."""

    culprit_id: str
    motive_id: str
    critical_clue_ids: Tuple[str, ...] = Field(
        description="Ordered; the hint mechanism reveals them in this order"
    )


class DialogueLine(CatalogModel):
    id: str
    speaker: str
    speaker_type: SpeakerType
    text: str


class LocationScript(CatalogModel):
    """Lines for a location: ``intro`` on the first visit, ``repeat`` afterwards."""

    intro: Tuple[DialogueLine, ...] = ()
    repeat: Tuple[DialogueLine, ...] = ()


class SuspectScript(CatalogModel):
    """An interview: intro lines plus one sequence per line of questioning."""

    intro: Tuple[DialogueLine, ...] = ()
    topics: Dict[str, Tuple[DialogueLine, ...]] = Field(default_factory=dict)


class LabAction(CatalogModel):
    """A one-shot action the player can take at a location."""

    id: str
    label: str
    location_id: str
    reveals_clue_id: Optional[str] = None
    sets_flag: Optional[StoryFlag] = None
    reveals_next_critical: bool = Field(
        default=False,
        description="Forces CORTEX to surface the next missing critical clue",
    )


# =============================================================================
# PROGRESS / EVALUATION
# =============================================================================


class Accusation(BaseModel):
    """The player's final submission. Any field may still be empty."""

    suspect_id: Optional[str] = None
    motive_id: Optional[str] = None
    evidence_id: Optional[str] = None


class Score(BaseModel):
    culprit_correct: bool = False
    motive_correct: bool = False
    critical_clues_found: int = Field(default=0, ge=0)
    critical_clues_total: int = Field(default=0, ge=0)


class Evaluation(BaseModel):
    """Result of scoring an accusation."""

    score: Score
    ending_key: EndingKey
