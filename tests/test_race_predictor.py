"""
Tests for Race Predictor

Tests for the PR/workout blend, the per-event prediction service and
the workout editing helpers.
"""

import logging
from dataclasses import FrozenInstanceError
from datetime import date, timedelta

import pytest
from racepredictor.predictions import (
    AthleteType,
    blend_predictions,
    create_predictor_from_profile,
    delete_workout,
    demo_workouts,
    EVENTS,
    format_duration,
    new_workout,
    PersonalRecord,
    RacePredictor,
    update_workout,
    Workout,
)
from racepredictor.predictions.athlete_types import DEFAULT_CONSTANTS

TODAY = date(2026, 3, 1)


def todays_workout(index: int, distance: float = 400, rep_time: str = "65.0") -> Workout:
    return Workout(f"w{index}", 4, distance, rep_time, 60, TODAY.isoformat())


class TestBlendPredictions:
    """Tests for the confidence-weighted geometric blend"""

    def test_no_workouts_uses_weight_floor(self):
        result = blend_predictions(240.0, 1500, 1609, "1500/miler", [], today=TODAY)

        assert result.data_weight == 0.25
        assert result.confidence == 0.0
        assert not result.fitness.data_backed

    def test_scenario_pr_only_mile(self):
        """1500m in 240.0 as a miler: baseline follows Riegel with b=1.08"""
        result = blend_predictions(240.0, 1500, 1609, "1500/miler", [], today=TODAY)

        assert result.base == pytest.approx(240.0 * (1609 / 1500) ** 1.08)
        assert format_duration(result.base) == "4:18.9"
        assert result.base != pytest.approx(result.wkt)
        assert min(result.base, result.wkt) < result.blended < max(result.base, result.wkt)

    def test_blend_formula(self):
        workouts = [todays_workout(1)]
        result = blend_predictions(240.0, 1500, 5000, "5000", workouts, today=TODAY)

        expected = result.wkt ** result.data_weight * result.base ** (1 - result.data_weight)
        assert result.blended == pytest.approx(expected)

    def test_fresh_workout_confidence(self):
        """All workouts dated today: confidence 0.9, data weight 0.79"""
        result = blend_predictions(
            240.0, 1500, 1500, "1500/miler", [todays_workout(1)], today=TODAY
        )
        assert result.confidence == pytest.approx(0.9)
        assert result.data_weight == pytest.approx(0.25 + 0.6 * 0.9)

    def test_stale_workouts_have_little_influence(self):
        old = Workout("old", 4, 400, "65.0", 60, (TODAY - timedelta(days=210)).isoformat())
        result = blend_predictions(240.0, 1500, 1500, "1500/miler", [old], today=TODAY)
        assert result.data_weight == pytest.approx(0.25, abs=0.01)

    @pytest.mark.parametrize("athlete_type", [t.value for t in AthleteType] + ["unknown"])
    def test_blend_brackets_both_curves(self, athlete_type):
        workouts = demo_workouts(today=TODAY)
        for event in EVENTS:
            result = blend_predictions(
                250.0, 1609, event.distance_m, athlete_type, workouts, today=TODAY
            )
            low, high = sorted((result.base, result.wkt))
            assert low - 1e-9 <= result.blended <= high + 1e-9

    def test_data_weight_monotonic_and_capped(self):
        """Adding fresh workouts never lowers the data weight, which stays <= 0.85"""
        stale = Workout("stale", 4, 1000, "3:00", 90, (TODAY - timedelta(days=42)).isoformat())
        workouts = [stale]
        previous = blend_predictions(240.0, 1500, 1500, "1500/miler", workouts, today=TODAY)

        for i in range(10):
            workouts = workouts + [todays_workout(i)]
            current = blend_predictions(240.0, 1500, 1500, "1500/miler", workouts, today=TODAY)
            assert current.data_weight >= previous.data_weight
            assert current.data_weight <= 0.85
            previous = current

    def test_invalid_pr_has_no_blend(self):
        result = blend_predictions(None, 1500, 1609, "1500/miler", [], today=TODAY)
        assert result.base is None
        assert result.blended is None
        assert result.wkt > 0

    @pytest.mark.parametrize("target", [0, -400, float("nan")])
    def test_invalid_target_distance_has_no_prediction(self, target):
        """Bad target distances come back as None on every curve"""
        result = blend_predictions(
            240.0, 1500, target, "1500/miler", [todays_workout(1)], today=TODAY
        )
        assert result.base is None
        assert result.wkt is None
        assert result.blended is None
        assert result.data_weight == pytest.approx(0.79)


class TestRacePredictor:
    """Tests for the per-event prediction service"""

    def test_predicts_all_events_in_order(self):
        pr = PersonalRecord.from_event("1500", "4:00.0")
        predictions = RacePredictor("1500/miler").predict(pr, [], today=TODAY)

        assert [p.event for p in predictions] == [
            "400", "800", "1500", "mile", "3000", "5000", "10000", "half", "marathon",
        ]
        assert predictions[3].distance_m == 1609
        assert predictions[7].distance_m == 21097.5

    def test_pr_event_baseline_is_identity(self):
        pr = PersonalRecord.from_event("1500", "4:00.0")
        predictions = RacePredictor("1500/miler").predict(pr, [], today=TODAY)
        assert predictions[2].baseline_seconds == pytest.approx(240.0)

    def test_times_increase_with_distance(self):
        pr = PersonalRecord.from_event("5000", "15:30")
        predictions = RacePredictor("5000").predict(pr, demo_workouts(TODAY), today=TODAY)

        blended = [p.blended_seconds for p in predictions]
        assert blended == sorted(blended)

    def test_invalid_pr_time_yields_no_predictions(self):
        pr = PersonalRecord.from_event("1500", "four minutes")
        assert RacePredictor("1500/miler").predict(pr, [], today=TODAY) == []

    def test_unknown_pr_event_rejected(self):
        with pytest.raises(ValueError, match="Unknown event"):
            PersonalRecord.from_event("steeple", "9:00")

    def test_repeated_calls_are_independent(self):
        predictor = RacePredictor("800")
        pr = PersonalRecord.from_event("800", "1:52.0")
        first = predictor.predict(pr, [todays_workout(1)], today=TODAY)
        predictor.predict(pr, [], today=TODAY)
        again = predictor.predict(pr, [todays_workout(1)], today=TODAY)
        assert first == again

    def test_summary_reports_defaults(self):
        summary = RacePredictor().summary([], today=TODAY)
        assert summary["data_weight"] == 0.25
        assert summary["fitness"] == {
            "mas": None,
            "threshold": None,
            "asr": None,
            "data_backed": False,
        }

    def test_create_predictor_from_profile(self):
        assert create_predictor_from_profile(None).athlete_type == AthleteType.MILER
        predictor = create_predictor_from_profile({"type": "marathon"})
        assert predictor.athlete_type == AthleteType.MARATHON

    def test_unknown_type_warns_once_per_predictor(self, caplog):
        predictor = RacePredictor("steeplechase")
        pr = PersonalRecord.from_event("1500", "4:00.0")

        with caplog.at_level(logging.WARNING):
            predictions = predictor.predict(pr, demo_workouts(TODAY), today=TODAY)
            predictor.predict(pr, [], today=TODAY)

        assert len(predictions) == 9
        assert "Unknown athlete type" not in caplog.text

    def test_unknown_type_uses_default_constants(self, caplog):
        with caplog.at_level(logging.WARNING):
            predictor = RacePredictor("steeplechase")

        assert predictor.constants == DEFAULT_CONSTANTS
        assert caplog.text.count("Unknown athlete type") == 1


class TestWorkoutEditing:
    """Tests for immutable workout edits"""

    def test_new_workout_defaults(self):
        workout = new_workout(today=TODAY)
        assert (workout.reps, workout.rep_distance_m, workout.rep_time) == (4, 400, "65.0")
        assert workout.rest_seconds == 60
        assert workout.date == "2026-03-01"
        assert workout.id != new_workout(today=TODAY).id

    def test_workouts_are_frozen(self):
        with pytest.raises(FrozenInstanceError):
            new_workout().rep_time = "60.0"

    def test_update_returns_new_records(self):
        original = [todays_workout(1), todays_workout(2)]
        updated = update_workout(original, "w2", rep_time="62.5", rest_seconds=90)

        assert original[1].rep_time == "65.0"
        assert updated[1].rep_time == "62.5"
        assert updated[1].rest_seconds == 90
        assert updated[0] is original[0]

    def test_delete(self):
        original = [todays_workout(1), todays_workout(2)]
        remaining = delete_workout(original, "w1")
        assert [w.id for w in remaining] == ["w2"]
        assert len(original) == 2

    def test_demo_workouts(self):
        workouts = demo_workouts(today=TODAY)
        assert [w.rep_distance_m for w in workouts] == [400, 300, 1000, 2000]
        assert workouts[2].date == "2026-02-08"

    def test_from_dict_accepts_client_keys(self):
        workout = Workout.from_dict(
            {"id": "x", "reps": 6, "repDistanceM": 400, "repTimeStr": "62.0",
             "restSeconds": 60, "date": "2026-02-22"}
        )
        assert workout == Workout("x", 6, 400.0, "62.0", 60.0, "2026-02-22")
        assert Workout.from_dict(workout.to_dict()) == workout

    def test_from_dict_requires_rep_fields(self):
        with pytest.raises(ValueError):
            Workout.from_dict({"reps": 4})
