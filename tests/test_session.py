import json
import random
from dataclasses import replace

import pytest

from ballistics import Environment, TurretState, build_range_table
from levels import CAMPAIGN_LEVELS, TRAINING_LEVELS, GameMode, generate_level_environment
from scoring import ShotResult
import session as session_module
from session import GameStatus, SessionState, TrainingSession


def make_session(seed: int = 3) -> TrainingSession:
    return TrainingSession(rng=random.Random(seed), clock=lambda: 1700000000.0)


def zeroed_elevation(env: Environment) -> float:
    return next(row.elevation for row in build_range_table(env.temperature)
                if row.distance == env.distance)


def test_start_briefing_generates_level_environment():
    session = make_session()

    assert session.start_briefing(GameMode.TRAINING, 1)

    state = session.state
    assert state.status is GameStatus.BRIEFING
    assert state.mode is GameMode.TRAINING
    assert state.level_index == 1
    assert state.environment.distance == 400
    assert state.environment.wind_direction == 90
    assert state.turrets == TurretState()
    assert state.last_shot is None
    assert session.level is TRAINING_LEVELS[1]


def test_start_briefing_ignores_unknown_level():
    session = make_session()
    before = session.state

    assert not session.start_briefing(GameMode.CAMPAIGN, 9)
    assert session.state is before


def test_fire_outside_aiming_is_ignored():
    session = make_session()
    assert session.fire() is None

    session.start_briefing(GameMode.TRAINING, 0)
    assert session.fire() is None
    assert session.state.status is GameStatus.BRIEFING


def test_full_attempt_with_range_card_elevation_hits_ten():
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 0)
    session.start_aiming()
    session.adjust_turret("elevation", zeroed_elevation(session.state.environment))

    result, mastery = session.fire()

    assert result.hit is True
    assert result.rings == 10
    assert result.timestamp == 1700000000000
    assert mastery == 2
    assert session.state.status is GameStatus.RESULT
    assert session.feedback[0].startswith("Perfect Hit")


def test_preview_matches_fired_impact():
    session = make_session()
    session.start_briefing(GameMode.CAMPAIGN, 4)
    session.start_aiming()
    session.dial_elevation(60)
    session.dial_windage(-5)
    preview = session.preview_impact()

    result, _ = session.fire()

    assert result.drop_error == preview.y
    assert result.wind_error == preview.x


def test_retry_keeps_environment_and_turrets():
    session = make_session()
    session.start_briefing(GameMode.CAMPAIGN, 2)
    session.start_aiming()
    session.dial_elevation(12)
    env = session.state.environment
    session.fire()

    assert session.retry()

    assert session.state.status is GameStatus.AIMING
    assert session.state.environment == env
    assert session.state.turrets.elevation == 1.2
    assert session.state.last_shot is None
    assert session.feedback == []


def test_turrets_can_be_dialed_on_result_screen_but_not_in_briefing():
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 0)
    assert not session.dial_elevation()

    session.start_aiming()
    session.fire()
    assert session.dial_elevation(3)
    assert session.state.turrets.elevation == 0.3
    assert session.reset_turrets()
    assert session.state.turrets == TurretState()


def test_next_level_requires_a_hit():
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 0)
    session.start_aiming()
    result, mastery = session.fire()

    assert result.hit is False
    assert mastery == 0
    assert not session.next_level()
    assert session.state.status is GameStatus.RESULT


def test_next_level_after_hit_rerolls_and_resets_turrets():
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 0)
    session.start_aiming()
    session.adjust_turret("elevation", zeroed_elevation(session.state.environment))
    session.fire()

    assert session.next_level()

    state = session.state
    assert state.status is GameStatus.BRIEFING
    assert state.level_index == 1
    assert state.turrets == TurretState()
    assert state.last_shot is None
    assert state.feedback == ()
    assert state.mastery == 2


def test_next_level_past_the_end_is_ignored():
    state = SessionState(
        status=GameStatus.RESULT,
        mode=GameMode.CAMPAIGN,
        level_index=len(CAMPAIGN_LEVELS) - 1,
        last_shot=ShotResult(hit=True, rings=10, drop_error=0.0, wind_error=0.0, timestamp=0),
    )

    assert session_module.next_level(state, random.Random(0)) is state
    assert not session_module.has_next_level(state)


def test_prev_level_only_from_briefing():
    session = make_session()
    session.start_briefing(GameMode.CAMPAIGN, 2)

    assert session.prev_level()
    assert session.state.level_index == 1
    assert session.state.status is GameStatus.BRIEFING
    assert session.prev_level()
    assert not session.prev_level()

    session.start_aiming()
    assert not session.prev_level()


def test_return_to_menu_clears_attempt_and_mastery():
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 0)
    session.start_aiming()
    session.adjust_turret("elevation", zeroed_elevation(session.state.environment))
    session.fire()
    assert session.state.mastery == 2

    assert session.return_to_menu()

    state = session.state
    assert state.status is GameStatus.MENU
    assert state.mode is None
    assert state.last_shot is None
    assert state.feedback == ()
    assert state.mastery == 0


def test_mastery_builds_to_expert_mode_across_retries():
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 0)
    session.start_aiming()
    session.adjust_turret("elevation", zeroed_elevation(session.state.environment))

    session.fire()
    assert not session.state.expert_mode
    session.retry()
    session.fire()
    assert session.state.mastery == 4
    assert session.state.expert_mode


def test_transitions_are_pure_functions_of_state():
    state = session_module.start_briefing(SessionState(), GameMode.TRAINING, 0, random.Random(5))
    aiming = session_module.start_aiming(state)
    fired = session_module.fire(aiming, clock=lambda: 10.0)

    assert state.status is GameStatus.BRIEFING
    assert aiming.status is GameStatus.AIMING
    assert fired.status is GameStatus.RESULT
    assert fired.last_shot.timestamp == 10000
    assert aiming.last_shot is None
    assert session_module.start_aiming(aiming) is aiming
    assert session_module.retry(aiming) is aiming


def test_impact_predictor_only_in_training():
    assert SessionState(mode=GameMode.TRAINING).show_impact_predictor
    assert not SessionState(mode=GameMode.CAMPAIGN).show_impact_predictor


def test_range_table_follows_environment_temperature():
    state = replace(SessionState(), environment=Environment(temperature=35.0))
    assert session_module.range_table(state) == build_range_table(35.0)


def test_unknown_turret_axis_raises():
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 0)
    session.start_aiming()
    with pytest.raises(ValueError):
        session.adjust_turret("focus", 0.1)


def environment_records(logger):
    records = []
    content = (logger.log_dir / "longrange.log").read_text(encoding="utf-8")
    for line in content.splitlines():
        if "ENVIRONMENT GENERATED" in line:
            records.append(json.loads(line.split(" | ", 1)[1]))
    return records


def test_prev_level_rolls_a_new_environment_for_the_earlier_level():
    session = make_session(seed=21)
    session.start_briefing(GameMode.CAMPAIGN, 2)

    rng = random.Random(21)
    generate_level_environment(CAMPAIGN_LEVELS[2], rng)
    expected = generate_level_environment(CAMPAIGN_LEVELS[1], rng)

    assert session.prev_level()
    assert session.state.environment == expected
    assert session.state.turrets == TurretState()
    assert session.level is CAMPAIGN_LEVELS[1]


def test_environment_is_logged_with_level_id(isolated_logger):
    session = make_session()
    session.start_briefing(GameMode.TRAINING, 1)
    session.prev_level()
    session.start_aiming()
    session.adjust_turret("elevation", zeroed_elevation(session.state.environment))
    session.fire()
    session.next_level()

    records = environment_records(isolated_logger)

    assert [r["field_level_id"] for r in records] == ["t2", "t1", "t2"]
    assert records[-1]["category"] == "ENVIRONMENT"
    assert records[-1]["field_distance"] == session.state.environment.distance
