from ballistics import Environment
from feedback import SECTION_DIVIDER, analyze_axes, analyze_shot, is_divider
from scoring import ShotResult


def make_result(drop_error: float, wind_error: float, hit: bool = False, rings: int = 0) -> ShotResult:
    return ShotResult(hit=hit, rings=rings, drop_error=drop_error,
                      wind_error=wind_error, timestamp=0)


def test_perfect_hit_has_only_outcome_and_scale():
    env = Environment(distance=300.0)
    lines = analyze_shot(make_result(0.1, -0.2, hit=True, rings=10), env)

    assert lines == [
        "Perfect Hit (10 Rings)! Your calculations were precise.",
        "Formula: At 300m distance, 1 MIL = 30cm.",
    ]


def test_low_miss_explains_elevation_correction():
    env = Environment(distance=500.0, temperature=15.0)
    lines = analyze_shot(make_result(-60.0, 0.0), env)

    assert lines[0].startswith("Miss.")
    assert lines[1] == "Formula: At 500m distance, 1 MIL = 50cm."
    assert lines[2] == SECTION_DIVIDER
    assert lines[3] == "[Elevation Error] Impact was 60cm LOW."
    assert lines[4] == "Calc: 60cm / 50cm = 1.20 MIL"
    assert lines[5] == "Correction: INCREASE Elevation by 1.2 MIL."
    assert len(lines) == 6


def test_hot_high_shot_gets_temperature_annotation():
    env = Environment(distance=600.0, temperature=35.0)
    lines = analyze_shot(make_result(20.0, 0.0, hit=True, rings=5), env)

    assert any("Temp 35°C (Hot)" in line for line in lines)
    assert "Correction: DECREASE Elevation by 0.3 MIL." in lines


def test_inconsistent_temperature_gets_no_annotation():
    hot_low = analyze_shot(make_result(-40.0, 0.0), Environment(distance=600.0, temperature=35.0))
    small_error = analyze_shot(make_result(12.0, 0.0), Environment(distance=200.0, temperature=35.0))
    cold_low = analyze_shot(make_result(-40.0, 0.0), Environment(distance=600.0, temperature=-5.0))

    assert not any("Env Analysis" in line for line in hot_low)
    assert not any("Env Analysis" in line for line in small_error)
    assert any("(Cold)" in line for line in cold_low)


def test_windage_section_mentions_wind_whenever_it_blows():
    env = Environment(distance=400.0, wind_speed=5.0, wind_direction=90.0)
    lines = analyze_shot(make_result(0.0, -36.0), env)

    assert lines[2] == SECTION_DIVIDER
    assert lines[3] == "[Windage Error] Impact was 36cm LEFT."
    assert lines[4] == "Env Analysis: Wind 5m/s @ 90°. Wind pushed the bullet."
    assert lines[5] == "Calc: 36cm / 40cm = 0.90 MIL"
    assert lines[6] == "Correction: Adjust Windage RIGHT by 0.9 MIL."


def test_both_axes_are_separated_by_dividers():
    env = Environment(distance=1000.0, wind_speed=0.0, temperature=15.0)
    lines = analyze_shot(make_result(150.0, 80.0), env)

    dividers = [index for index, line in enumerate(lines) if is_divider(line)]
    assert len(dividers) == 2
    assert lines[dividers[0] + 1].startswith("[Elevation Error]")
    assert lines[dividers[1] + 1].startswith("[Windage Error]")
    assert "Correction: Adjust Windage LEFT by 0.8 MIL." in lines
    content = [line for line in lines if not is_divider(line)]
    assert SECTION_DIVIDER not in content


def test_small_corrections_are_not_reported():
    env = Environment(distance=1000.0)
    diagnoses = analyze_axes(make_result(4.9, -5.0), env)

    assert diagnoses == []


def test_structured_diagnosis_carries_signed_correction():
    env = Environment(distance=800.0, wind_speed=3.0, wind_direction=270.0)
    elevation, windage = analyze_axes(make_result(-40.0, 24.0), env)

    assert elevation.axis == "elevation"
    assert elevation.correction_mil == 0.5
    assert elevation.direction == "LOW"
    assert elevation.adjustment == "INCREASE"
    assert windage.correction_mil == -0.3
    assert windage.adjustment == "LEFT"
    assert windage.annotation is not None


def test_half_values_round_up_in_calc_and_dial():
    env = Environment(distance=300.0)
    lines = analyze_shot(make_result(-7.5, 0.0, hit=True, rings=9), env)

    assert "[Elevation Error] Impact was 8cm LOW." in lines
    assert "Calc: 8cm / 30cm = 0.25 MIL" in lines
    assert "Correction: INCREASE Elevation by 0.3 MIL." in lines
