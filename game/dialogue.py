"""Dialogue cursor variants and script resolution.

A dialogue context says which script is on screen and how far into it the
player has read. Each variant carries only what it needs to find its script:

- ``IntroContext``: the opening briefing
- ``LocationContext``: a location's first-visit or repeat lines
- ``SuspectContext``: an interview, optionally narrowed to one topic
- ``EndingContext``: the lines for an ending tier
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from game.models import DialogueLine

if TYPE_CHECKING:
    from game.catalog import CaseCatalog

logger = logging.getLogger(__name__)


class DialogueKind(str, Enum):
    INTRO = "intro"
    LOCATION = "location"
    SUSPECT = "suspect"
    ENDING = "ending"


class DialogueOutcome(str, Enum):
    """What ``advance_dialogue_index`` reports back to the caller."""

    CONTINUE = "continue"
    END = "end"


@dataclass(frozen=True)
class IntroContext:
    index: int = 0
    kind = DialogueKind.INTRO

    @property
    def target_id(self) -> None:
        return None


@dataclass(frozen=True)
class LocationContext:
    location_id: str
    repeat: bool = False
    index: int = 0
    kind = DialogueKind.LOCATION

    @property
    def target_id(self) -> str:
        return self.location_id


@dataclass(frozen=True)
class SuspectContext:
    suspect_id: str
    topic_id: Optional[str] = None
    index: int = 0
    kind = DialogueKind.SUSPECT

    @property
    def target_id(self) -> str:
        return self.suspect_id


@dataclass(frozen=True)
class EndingContext:
    ending_key: str
    index: int = 0
    kind = DialogueKind.ENDING

    @property
    def target_id(self) -> str:
        return self.ending_key


DialogueContext = Union[IntroContext, LocationContext, SuspectContext, EndingContext]


def make_context(
    kind: DialogueKind | str,
    target_id: Optional[str] = None,
    index: int = 0,
    topic_id: Optional[str] = None,
) -> DialogueContext:
    """Build a context from loose arguments.

    No check is made that the target has a script; that surfaces later as an
    unresolvable context when the cursor is advanced or read.
    """
    kind = DialogueKind(kind)
    if kind is DialogueKind.INTRO:
        return IntroContext(index=index)
    if kind is DialogueKind.LOCATION:
        return LocationContext(location_id=target_id, index=index)
    if kind is DialogueKind.SUSPECT:
        return SuspectContext(suspect_id=target_id, topic_id=topic_id, index=index)
    return EndingContext(ending_key=getattr(target_id, "value", target_id), index=index)


def with_index(context: DialogueContext, index: int) -> DialogueContext:
    return dataclasses.replace(context, index=index)


def resolve_lines(
    catalog: CaseCatalog, context: DialogueContext
) -> Optional[Tuple[DialogueLine, ...]]:
    """Return the line sequence a context points at, or None if there is none."""
    match context:
        case IntroContext():
            return catalog.intro_dialogue
        case LocationContext(location_id=location_id, repeat=repeat):
            script = catalog.location_dialogue.get(location_id)
            if script is None:
                logger.warning("No location dialogue for '%s'", location_id)
                return None
            if repeat and script.repeat:
                return script.repeat
            return script.intro
        case SuspectContext(suspect_id=suspect_id, topic_id=topic_id):
            script = catalog.suspect_dialogue.get(suspect_id)
            if script is None:
                logger.warning("No suspect dialogue for '%s'", suspect_id)
                return None
            if topic_id is None:
                return script.intro
            lines = script.topics.get(topic_id)
            if lines is None:
                logger.warning("Suspect '%s' has no topic '%s'", suspect_id, topic_id)
            return lines
        case EndingContext(ending_key=ending_key):
            lines = catalog.endings.get(ending_key)
            if lines is None:
                logger.warning("No ending dialogue for '%s'", ending_key)
            return lines
        case _:
            logger.warning("Unknown dialogue context %r", context)
            return None
