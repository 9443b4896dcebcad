"""Immutable content catalog for a case.

The catalog is built once at startup and shared by every playthrough. It is
validated eagerly: a case with dangling references is a content bug, so
``build_catalog`` refuses it with ``CatalogError`` instead of letting the
engine run on partial data.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from game.errors import CatalogError
from game.models import (
    CaseSolution,
    Clue,
    DialogueLine,
    EndingKey,
    GameMetadata,
    LabAction,
    Location,
    LocationScript,
    Motive,
    Suspect,
    SuspectScript,
)

logger = logging.getLogger(__name__)


def _index(items: Iterable, kind: str, problems: List[str]) -> Dict[str, object]:
    index: Dict[str, object] = {}
    for item in items:
        if item.id in index:
            problems.append(f"duplicate {kind} id '{item.id}'")
            continue
        index[item.id] = item
    return index


class CaseCatalog:
    """Static reference data: locations, people, clues, scripts and the solution."""

    def __init__(
        self,
        metadata: GameMetadata,
        locations: Sequence[Location],
        suspects: Sequence[Suspect],
        motives: Sequence[Motive],
        clues: Sequence[Clue],
        solution: CaseSolution,
        intro_dialogue: Sequence[DialogueLine] = (),
        location_dialogue: Optional[Mapping[str, LocationScript]] = None,
        suspect_dialogue: Optional[Mapping[str, SuspectScript]] = None,
        endings: Optional[Mapping[str, Sequence[DialogueLine]]] = None,
        lab_actions: Sequence[LabAction] = (),
        topic_labels: Optional[Mapping[str, str]] = None,
    ):
        self.metadata = metadata
        self.locations: Tuple[Location, ...] = tuple(locations)
        self.suspects: Tuple[Suspect, ...] = tuple(suspects)
        self.motives: Tuple[Motive, ...] = tuple(motives)
        self.clues: Tuple[Clue, ...] = tuple(clues)
        self.solution = solution
        self.intro_dialogue: Tuple[DialogueLine, ...] = tuple(intro_dialogue)
        self.location_dialogue = MappingProxyType(dict(location_dialogue or {}))
        self.suspect_dialogue = MappingProxyType(dict(suspect_dialogue or {}))
        self.endings = MappingProxyType(
            {key: tuple(lines) for key, lines in (endings or {}).items()}
        )
        self.lab_actions: Tuple[LabAction, ...] = tuple(lab_actions)
        self.topic_labels = MappingProxyType(dict(topic_labels or {}))

        self.problems: List[str] = []
        self._locations = _index(self.locations, "location", self.problems)
        self._suspects = _index(self.suspects, "suspect", self.problems)
        self._motives = _index(self.motives, "motive", self.problems)
        self._clues = _index(self.clues, "clue", self.problems)
        self._lab_actions = _index(self.lab_actions, "lab action", self.problems)
        self.problems.extend(self._check_references())

    # =========================================================================
    # Validation
    # =========================================================================

    def _check_references(self) -> List[str]:
        problems = []
        if not self.locations:
            problems.append("catalog has no locations")

        for clue in self.clues:
            if clue.location_id not in self._locations:
                problems.append(f"clue '{clue.id}' points at unknown location '{clue.location_id}'")

        solution = self.solution
        if solution.culprit_id not in self._suspects:
            problems.append(f"solution culprit '{solution.culprit_id}' is not a suspect")
        if solution.motive_id not in self._motives:
            problems.append(f"solution motive '{solution.motive_id}' is not a motive")
        if len(set(solution.critical_clue_ids)) != len(solution.critical_clue_ids):
            problems.append("solution lists a critical clue more than once")
        for clue_id in solution.critical_clue_ids:
            clue = self._clues.get(clue_id)
            if clue is None:
                problems.append(f"critical clue '{clue_id}' is not in the catalog")
            elif not clue.is_critical:
                problems.append(f"critical clue '{clue_id}' is not flagged is_critical")
        for clue in self.clues:
            if clue.is_critical and clue.id not in solution.critical_clue_ids:
                problems.append(f"clue '{clue.id}' is flagged critical but missing from the solution")

        for location_id in self.location_dialogue:
            if location_id not in self._locations:
                problems.append(f"dialogue for unknown location '{location_id}'")
        for suspect_id in self.suspect_dialogue:
            if suspect_id not in self._suspects:
                problems.append(f"dialogue for unknown suspect '{suspect_id}'")
        known_endings = {key.value for key in EndingKey}
        for ending_key in self.endings:
            if ending_key not in known_endings:
                problems.append(f"unknown ending key '{ending_key}'")

        for action in self.lab_actions:
            if action.location_id not in self._locations:
                problems.append(f"lab action '{action.id}' points at unknown location '{action.location_id}'")
            if action.reveals_clue_id and action.reveals_clue_id not in self._clues:
                problems.append(f"lab action '{action.id}' reveals unknown clue '{action.reveals_clue_id}'")
        return problems

    # =========================================================================
    # Lookups
    # =========================================================================

    def find_location_by_id(self, location_id: Optional[str]) -> Optional[Location]:
        return self._locations.get(location_id)

    def find_suspect_by_id(self, suspect_id: Optional[str]) -> Optional[Suspect]:
        return self._suspects.get(suspect_id)

    def find_motive_by_id(self, motive_id: Optional[str]) -> Optional[Motive]:
        return self._motives.get(motive_id)

    def find_clue_by_id(self, clue_id: Optional[str]) -> Optional[Clue]:
        return self._clues.get(clue_id)

    def find_lab_action_by_id(self, action_id: Optional[str]) -> Optional[LabAction]:
        return self._lab_actions.get(action_id)

    def lab_actions_at(self, location_id: str) -> List[LabAction]:
        """One-shot actions offered at a location, in catalog order."""
        return [action for action in self.lab_actions if action.location_id == location_id]

    def topic_label(self, topic_id: str) -> str:
        return self.topic_labels.get(topic_id) or topic_id.replace("_", " ")

    @property
    def critical_clue_total(self) -> int:
        return len(self.solution.critical_clue_ids)


def build_catalog(**parts) -> CaseCatalog:
    """Build and validate a catalog. Raises ``CatalogError`` on any problem."""
    catalog = CaseCatalog(**parts)
    if catalog.problems:
        logger.error("Case catalog failed validation: %s", catalog.problems)
        raise CatalogError("Invalid case catalog", catalog.problems)
    return catalog


def load_default_catalog() -> CaseCatalog:
    """Load the bundled "Ghost Algorithm" case."""
    from game import case_data

    catalog = build_catalog(
        metadata=case_data.GAME_METADATA,
        locations=case_data.LOCATIONS,
        suspects=case_data.SUSPECTS,
        motives=case_data.MOTIVES,
        clues=case_data.CLUES,
        solution=case_data.CASE_SOLUTION,
        intro_dialogue=case_data.INTRO_DIALOGUE,
        location_dialogue=case_data.LOCATION_DIALOGUE,
        suspect_dialogue=case_data.SUSPECT_DIALOGUE,
        endings=case_data.ENDINGS,
        lab_actions=case_data.LAB_ACTIONS,
        topic_labels=case_data.TOPIC_LABELS,
    )
    logger.info(
        "Loaded case '%s': %d locations, %d suspects, %d clues (%d critical)",
        catalog.metadata.id,
        len(catalog.locations),
        len(catalog.suspects),
        len(catalog.clues),
        catalog.critical_clue_total,
    )
    return catalog
