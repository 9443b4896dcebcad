"""Accusation scoring.

Deterministic and side-effect free so it can be tested without an engine.
``CaseEngine.evaluate_accusation`` applies the result to the game state.
"""

import math
from typing import Iterable

from game.models import Accusation, CaseSolution, EndingKey, Evaluation, Score

CULPRIT_WEIGHT = 0.6
MOTIVE_WEIGHT = 0.2
EVIDENCE_WEIGHT = 0.2


def close_threshold(critical_total: int) -> int:
    """Critical clues needed for a 'close' ending when the motive is wrong."""
    return math.ceil(critical_total / 2)


def decide_ending(
    culprit_correct: bool,
    motive_correct: bool,
    critical_found: int,
    critical_total: int,
) -> EndingKey:
    """Pick the ending tier. Rules are checked in order; the first match wins."""
    if culprit_correct and motive_correct and critical_found == critical_total:
        return EndingKey.PERFECT
    if culprit_correct and (motive_correct or critical_found >= close_threshold(critical_total)):
        return EndingKey.CLOSE
    return EndingKey.WRONG


def evaluate(
    accusation: Accusation,
    discovered_clue_ids: Iterable[str],
    solution: CaseSolution,
) -> Evaluation:
    """Score an accusation against the case solution.

    Only the number of critical clues found matters, not which ones. The
    player's chosen key evidence is recorded but does not affect the tier.
    """
    discovered = set(discovered_clue_ids)
    culprit_correct = accusation.suspect_id == solution.culprit_id
    motive_correct = accusation.motive_id == solution.motive_id
    critical_found = sum(1 for clue_id in solution.critical_clue_ids if clue_id in discovered)
    critical_total = len(solution.critical_clue_ids)

    score = Score(
        culprit_correct=culprit_correct,
        motive_correct=motive_correct,
        critical_clues_found=critical_found,
        critical_clues_total=critical_total,
    )
    ending_key = decide_ending(culprit_correct, motive_correct, critical_found, critical_total)
    return Evaluation(score=score, ending_key=ending_key)


def confidence(score: Score) -> float:
    """CORTEX's display confidence in [0, 1]. Never used to pick the ending."""
    evidence_ratio = 0.0
    if score.critical_clues_total > 0:
        evidence_ratio = score.critical_clues_found / score.critical_clues_total
    value = (
        CULPRIT_WEIGHT * score.culprit_correct
        + MOTIVE_WEIGHT * score.motive_correct
        + EVIDENCE_WEIGHT * evidence_ratio
    )
    return max(0.0, min(1.0, value))


def format_confidence(score: Score) -> str:
    """Confidence as a percentage with one decimal, e.g. ``'86.0%'``."""
    return f"{confidence(score) * 100:.1f}%"
