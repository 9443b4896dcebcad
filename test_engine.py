"""Tests for the state mutators on CaseEngine."""

import logging

import pytest

from config.settings import GameSettings
from game.dialogue import (
    DialogueOutcome,
    EndingContext,
    IntroContext,
    LocationContext,
    SuspectContext,
)
from game.engine import CaseEngine, ClueStatus
from game.models import Accusation, EndingKey, GamePhase, StoryFlag

CRITICAL_CLUES = [
    "locked_office",
    "badge_log_anomaly",
    "audit_log_redactions",
    "rooftop_argument",
    "victim_exit_request",
]


# =============================================================================
# Initial state & reset
# =============================================================================


def test_initial_state(engine):
    state = engine.get_state()
    assert state.phase == GamePhase.INTRO
    assert state.current_location_id is None
    assert state.previous_location_id is None
    assert state.visited_location_ids == []
    assert state.discovered_clue_ids == []
    assert state.dialogue_context == IntroContext()
    assert state.cortex_hints_enabled is True
    assert state.accusation == Accusation()
    assert state.ending_key is None
    assert state.score.critical_clues_total == 5
    assert state.suspect_intro_seen == {"rhea": False, "milo": False, "dana": False}


def test_hints_default_comes_from_settings(catalog):
    engine = CaseEngine(catalog, GameSettings(hints_enabled=False))
    assert engine.get_state().cortex_hints_enabled is False


def test_reset_replaces_the_whole_state(engine):
    engine.start_investigation()
    engine.discover_clue("locked_office")
    engine.mark_lab_action_used("lab_inspect_door")
    engine.set_flag("anything")
    engine.set_accusation("rhea", "coverup", "locked_office")
    engine.evaluate_accusation()
    old_state = engine.get_state()

    new_state = engine.reset_game_state()

    assert new_state is not old_state
    assert engine.get_state() is new_state
    assert new_state.discovered_clue_ids == []
    assert new_state.visited_location_ids == []
    assert new_state.accusation == Accusation()
    assert new_state.ending_key is None
    assert new_state.phase == GamePhase.INTRO
    assert new_state.flags == {}
    assert new_state.lab_actions_used == set()
    # the discarded instance is left as it was
    assert old_state.discovered_clue_ids == ["locked_office"]


# =============================================================================
# Phase
# =============================================================================


def test_set_phase_accepts_enum_and_value(engine):
    assert engine.set_phase(GamePhase.INVESTIGATION) is True
    assert engine.get_state().phase == GamePhase.INVESTIGATION
    assert engine.set_phase("deduction") is True
    assert engine.get_state().phase == GamePhase.DEDUCTION


def test_set_phase_unknown_is_a_logged_no_op(engine, caplog):
    engine.set_phase(GamePhase.DEDUCTION)
    with caplog.at_level(logging.WARNING):
        assert engine.set_phase("celebration") is False
    assert engine.get_state().phase == GamePhase.DEDUCTION
    assert "unknown phase" in caplog.text


def test_entering_intro_resets_dialogue(engine):
    engine.visit_location("lab")
    engine.advance_dialogue_index()
    engine.set_phase(GamePhase.INTRO)
    assert engine.get_state().dialogue_context == IntroContext()


def test_other_phases_leave_dialogue_alone(engine):
    engine.visit_location("lab")
    engine.set_phase(GamePhase.DEDUCTION)
    assert engine.get_state().dialogue_context == LocationContext(location_id="lab")


def test_ending_phase_requires_an_evaluation(engine):
    assert engine.set_phase(GamePhase.ENDING) is False
    assert engine.get_state().phase == GamePhase.INTRO


def test_leaving_ending_clears_ending_key(engine):
    engine.set_accusation("dana", "fear", None)
    engine.evaluate_accusation()
    engine.set_phase(GamePhase.DEDUCTION)
    state = engine.get_state()
    assert state.ending_key is None
    assert state.score.culprit_correct is False


# =============================================================================
# Locations
# =============================================================================


def test_visit_reports_first_visit_then_repeat(engine):
    first = engine.visit_location("lab")
    second = engine.visit_location("lab")
    assert first.is_first_visit is True
    assert first.location.id == "lab"
    assert second.is_first_visit is False
    assert engine.get_state().visited_location_ids == ["lab"]


def test_visit_tracks_previous_location(engine):
    engine.visit_location("lab")
    engine.visit_location("rooftop")
    state = engine.get_state()
    assert state.current_location_id == "rooftop"
    assert state.previous_location_id == "lab"
    engine.visit_location("server_vault")
    assert state.previous_location_id == "rooftop"
    assert state.visited_location_ids == ["lab", "rooftop", "server_vault"]


def test_visit_points_dialogue_at_intro_then_repeat_script(engine):
    engine.visit_location("lab")
    assert engine.get_state().dialogue_context == LocationContext(location_id="lab", repeat=False)
    assert engine.current_dialogue_line().id == "lab_intro_1"

    engine.visit_location("rooftop")
    engine.visit_location("lab")
    assert engine.get_state().dialogue_context == LocationContext(location_id="lab", repeat=True)
    assert engine.current_dialogue_line().id == "lab_repeat_1"


def test_visit_unknown_location_changes_nothing(engine, caplog):
    engine.visit_location("lab")
    with caplog.at_level(logging.WARNING):
        assert engine.visit_location("basement") is None
    state = engine.get_state()
    assert state.current_location_id == "lab"
    assert state.previous_location_id is None
    assert state.visited_location_ids == ["lab"]
    assert "basement" in caplog.text


def test_has_visited_location(engine):
    assert engine.has_visited_location("lab") is False
    engine.visit_location("lab")
    assert engine.has_visited_location("lab") is True


def test_start_investigation(engine):
    result = engine.start_investigation()
    state = engine.get_state()
    assert state.phase == GamePhase.INVESTIGATION
    assert state.current_location_id == "lab"
    assert result.is_first_visit is True


def test_start_investigation_uses_configured_location(catalog):
    engine = CaseEngine(catalog, GameSettings(starting_location_id="rooftop"))
    engine.start_investigation()
    assert engine.get_state().current_location_id == "rooftop"


def test_start_investigation_falls_back_when_configured_location_unknown(catalog):
    engine = CaseEngine(catalog, GameSettings(starting_location_id="moon"))
    engine.start_investigation()
    assert engine.get_state().current_location_id == "lab"


# =============================================================================
# Clues
# =============================================================================


def test_discover_clue_is_idempotent(engine):
    first = engine.discover_clue("rooftop_argument")
    second = engine.discover_clue("rooftop_argument")
    assert first.status == ClueStatus.DISCOVERED
    assert first.clue.id == "rooftop_argument"
    assert second.status == ClueStatus.ALREADY_KNOWN
    assert second.is_new is False
    assert engine.get_state().discovered_clue_ids == ["rooftop_argument"]


def test_discover_unknown_clue(engine):
    result = engine.discover_clue("smoking_gun")
    assert result.status == ClueStatus.NOT_FOUND
    assert result.clue is None
    assert engine.get_state().discovered_clue_ids == []


def test_has_clue(engine):
    assert engine.has_clue("locked_office") is False
    engine.discover_clue("locked_office")
    assert engine.has_clue("locked_office") is True


def test_discovered_clues_keep_discovery_order_and_are_restartable(engine):
    clues = engine.list_discovered_clues()
    assert list(clues) == []
    engine.discover_clue("victim_exit_request")
    engine.discover_clue("locked_office")
    engine.discover_clue("milo_casino_sim")

    expected = ["victim_exit_request", "locked_office", "milo_casino_sim"]
    assert [c.id for c in clues] == expected
    assert [c.id for c in clues] == expected
    assert len(clues) == 3


def test_reveal_next_critical_clue_follows_solution_order(engine):
    engine.discover_clue("badge_log_anomaly")
    revealed = []
    while True:
        clue = engine.reveal_next_critical_clue()
        if clue is None:
            break
        revealed.append(clue.id)
    assert revealed == ["locked_office", "audit_log_redactions", "rooftop_argument", "victim_exit_request"]
    assert engine.reveal_next_critical_clue() is None
    assert set(CRITICAL_CLUES) <= set(engine.get_state().discovered_clue_ids)


# =============================================================================
# Dialogue
# =============================================================================


def test_advance_intro_dialogue(engine):
    outcomes = [engine.advance_dialogue_index() for _ in range(6)]
    # four intro lines: three steps forward, then the end
    assert outcomes == [DialogueOutcome.CONTINUE] * 3 + [DialogueOutcome.END] * 3
    assert engine.get_state().dialogue_context.index == 3
    assert engine.current_dialogue_line().id == "intro_4"


def test_advance_location_dialogue_never_overruns(engine):
    engine.visit_location("server_vault")
    assert engine.advance_dialogue_index() == DialogueOutcome.CONTINUE
    assert engine.advance_dialogue_index() == DialogueOutcome.END
    assert engine.get_state().dialogue_context.index == 1


def test_advance_unresolvable_context_reports_end(engine, caplog):
    engine.set_dialogue_context("location", "basement")
    with caplog.at_level(logging.WARNING):
        assert engine.advance_dialogue_index() == DialogueOutcome.END
    assert engine.get_state().dialogue_context.index == 0
    assert engine.current_dialogue_line() is None
    assert "basement" in caplog.text


def test_set_dialogue_context_overwrites_without_validation(engine):
    engine.set_dialogue_context("suspect", "nobody", 4)
    assert engine.get_state().dialogue_context == SuspectContext(suspect_id="nobody", index=4)
    engine.set_dialogue_context("ending", "close")
    assert engine.get_state().dialogue_context == EndingContext(ending_key="close")


def test_set_dialogue_context_unknown_kind_is_ignored(engine):
    engine.set_dialogue_context("flashback", "lab")
    assert engine.get_state().dialogue_context == IntroContext()


def test_out_of_range_index_has_no_current_line(engine):
    engine.set_dialogue_context("intro", None, 10)
    assert engine.current_dialogue_line() is None
    assert engine.advance_dialogue_index() == DialogueOutcome.END


# =============================================================================
# Suspects
# =============================================================================


def test_interview_suspect(engine):
    first = engine.interview_suspect("milo")
    assert first.is_first_interview is True
    assert engine.is_suspect_intro_seen("milo") is True
    assert engine.get_state().dialogue_context == SuspectContext(suspect_id="milo")
    assert engine.current_dialogue_line().id == "milo_intro_1"
    assert engine.interview_suspect("milo").is_first_interview is False


def test_interview_unknown_suspect(engine):
    engine.visit_location("lab")
    assert engine.interview_suspect("ghost") is None
    assert engine.get_state().dialogue_context == LocationContext(location_id="lab")


def test_ask_topic_switches_script_and_unlocks(engine):
    line = engine.ask_topic("dana", "audit_logs")
    assert line.id == "dana_audit_1"
    assert engine.unlocked_topics_for("dana") == ["audit_logs"]
    engine.ask_topic("dana", "audit_logs")
    assert engine.unlocked_topics_for("dana") == ["audit_logs"]
    assert engine.advance_dialogue_index() == DialogueOutcome.END


def test_ask_unknown_topic(engine):
    assert engine.ask_topic("dana", "casino_sims") is None
    assert engine.unlocked_topics_for("dana") == []


def test_unlock_topic_for_unknown_suspect_is_ignored(engine):
    engine.unlock_suspect_topic("ghost", "alibi")
    assert "ghost" not in engine.get_state().unlocked_topics
    assert engine.unlocked_topics_for("ghost") == []


# =============================================================================
# Flags, hints, lab actions
# =============================================================================


def test_flags(engine):
    assert engine.get_flag(StoryFlag.LAB_FORBIDDEN_SCAN_USED) is False
    engine.set_flag(StoryFlag.LAB_FORBIDDEN_SCAN_USED)
    assert engine.get_flag("lab_forbidden_scan_used") is True
    engine.set_flag("lab_forbidden_scan_used", False)
    assert engine.get_flag(StoryFlag.LAB_FORBIDDEN_SCAN_USED) is False
    engine.clear_flag(StoryFlag.LAB_FORBIDDEN_SCAN_USED)
    assert "lab_forbidden_scan_used" not in engine.get_state().flags


def test_unregistered_flags_still_work(engine):
    engine.set_flag("met_the_bartender")
    assert engine.get_flag("met_the_bartender") is True
    engine.clear_flag("met_the_bartender")
    assert engine.get_flag("met_the_bartender") is False
    engine.clear_flag("never_set")


def test_toggle_cortex_hints(engine):
    assert engine.toggle_cortex_hints() is False
    assert engine.get_state().cortex_hints_enabled is False
    assert engine.toggle_cortex_hints() is True


def test_lab_action_tracking(engine):
    assert engine.is_lab_action_used("lab_inspect_door") is False
    engine.mark_lab_action_used("lab_inspect_door")
    engine.mark_lab_action_used("lab_inspect_door")
    assert engine.is_lab_action_used("lab_inspect_door") is True
    assert engine.get_state().lab_actions_used == {"lab_inspect_door"}


def test_perform_lab_action_reveals_clue_once(engine):
    engine.visit_location("lab")
    result = engine.perform_lab_action("lab_check_terminal")
    assert result.already_used is False
    assert [c.id for c in result.revealed_clues] == ["investor_pressure_email"]

    again = engine.perform_lab_action("lab_check_terminal")
    assert again.already_used is True
    assert again.revealed_clues == []
    assert engine.get_state().discovered_clue_ids == ["investor_pressure_email"]


def test_forbidden_scan_sets_flag_and_reveals_next_critical(engine):
    engine.visit_location("lab")
    engine.discover_clue("locked_office")
    result = engine.perform_lab_action("lab_forbidden_scan")
    assert [c.id for c in result.revealed_clues] == ["badge_log_anomaly"]
    assert engine.get_flag(StoryFlag.LAB_FORBIDDEN_SCAN_USED) is True


def test_lab_action_requires_its_location(engine):
    engine.visit_location("rooftop")
    assert engine.perform_lab_action("lab_inspect_door") is None
    assert engine.is_lab_action_used("lab_inspect_door") is False


def test_unknown_lab_action(engine):
    engine.visit_location("lab")
    assert engine.perform_lab_action("lab_self_destruct") is None


# =============================================================================
# Accusation
# =============================================================================


def discover_critical(engine, count):
    for clue_id in CRITICAL_CLUES[:count]:
        engine.discover_clue(clue_id)


def test_set_accusation_keeps_unknown_ids(engine, caplog):
    with caplog.at_level(logging.WARNING):
        accusation = engine.set_accusation("ghost", "coverup", None)
    assert accusation == Accusation(suspect_id="ghost", motive_id="coverup")
    assert "unknown suspect_id 'ghost'" in caplog.text


def test_perfect_ending(engine):
    discover_critical(engine, 5)
    engine.set_accusation("rhea", "coverup", "locked_office")
    result = engine.evaluate_accusation()

    state = engine.get_state()
    assert result.ending_key == EndingKey.PERFECT
    assert state.ending_key == EndingKey.PERFECT
    assert state.phase == GamePhase.ENDING
    assert state.score == result.score
    assert state.dialogue_context == EndingContext(ending_key="perfect")
    assert engine.current_dialogue_line().id == "ending_perfect_1"


def test_close_ending_with_three_of_five(engine):
    discover_critical(engine, 3)
    engine.set_accusation("rhea", "greed", None)
    assert engine.evaluate_accusation().ending_key == EndingKey.CLOSE


def test_wrong_ending_with_one_of_five(engine):
    discover_critical(engine, 1)
    engine.set_accusation("rhea", "greed", None)
    assert engine.evaluate_accusation().ending_key == EndingKey.WRONG


def test_wrong_culprit(engine):
    discover_critical(engine, 5)
    engine.set_accusation("milo", "coverup", None)
    assert engine.evaluate_accusation().ending_key == EndingKey.WRONG


def test_reevaluation_reapplies_side_effects(engine):
    discover_critical(engine, 3)
    engine.set_accusation("rhea", "greed", None)
    first = engine.evaluate_accusation()
    engine.advance_dialogue_index()
    second = engine.evaluate_accusation()
    assert first == second
    assert engine.get_state().dialogue_context == EndingContext(ending_key="close")


def test_reevaluation_can_be_disabled(catalog):
    engine = CaseEngine(catalog, GameSettings(allow_reevaluation=False))
    engine.set_accusation("dana", "fear", None)
    first = engine.evaluate_accusation()

    discover_critical(engine, 5)
    engine.set_accusation("rhea", "coverup", None)
    second = engine.evaluate_accusation()
    assert second.ending_key == EndingKey.WRONG
    assert second == first


@pytest.mark.parametrize("phase", list(GamePhase))
def test_ending_key_set_only_in_ending_phase(engine, phase):
    engine.set_accusation("rhea", "coverup", None)
    engine.evaluate_accusation()
    engine.set_phase(phase)
    state = engine.get_state()
    assert (state.ending_key is not None) == (state.phase is GamePhase.ENDING)


def test_discovered_clues_handle_follows_a_reset(engine):
    notebook = engine.list_discovered_clues()
    engine.discover_clue("locked_office")
    assert [c.id for c in notebook] == ["locked_office"]

    engine.reset_game_state()
    assert [c.id for c in notebook] == []
    assert len(notebook) == 0
    assert not notebook

    engine.discover_clue("rooftop_argument")
    assert [c.id for c in notebook] == ["rooftop_argument"]


def test_evaluation_result_is_detached_from_state(engine):
    engine.set_accusation("rhea", "coverup", None)
    result = engine.evaluate_accusation()
    result.score.critical_clues_found = 99
    assert engine.get_state().score.critical_clues_found == 0


def test_negative_dialogue_index_starts_at_zero(engine, caplog):
    with caplog.at_level(logging.WARNING):
        engine.set_dialogue_context("intro", None, -1)
    assert engine.get_state().dialogue_context == IntroContext(index=0)
    assert engine.current_dialogue_line().id == "intro_1"
    assert "Negative dialogue index" in caplog.text


def test_state_summary(engine):
    engine.visit_location("lab")
    engine.discover_clue("locked_office")
    engine.set_accusation("rhea", "coverup", None)
    engine.evaluate_accusation()

    summary = engine.get_state().to_summary()
    assert summary["phase"] == "ending"
    assert summary["current_location_id"] == "lab"
    assert summary["discovered_clue_ids"] == ["locked_office"]
    assert summary["dialogue"] == {"kind": "ending", "target_id": "close", "index": 0}
    assert summary["ending_key"] == "close"
    assert summary["accusation"] == {"suspect_id": "rhea", "motive_id": "coverup", "evidence_id": None}
    assert summary["score"]["critical_clues_found"] == 1
