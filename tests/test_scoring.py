import logging

import pytest

from app.models import ConvenienceResult
from app.services.distance import calculate_distance
from app.services.exceptions import InvalidCoordinateError, InvalidPlaceTypesError, MissingLocationError
from app.services.profiles import PLACE_PROFILES, CategoryProfile
from app.services.scoring import ConvenienceScorer, _round_half_up, get_scorer

from conftest import make_place


@pytest.fixture
def scorer():
    return ConvenienceScorer()


class TestDistanceScore:
    def test_full_credit_inside_immediate_band(self):
        assert ConvenienceScorer.distance_score(0.0, 3.0) == 1.0
        assert ConvenienceScorer.distance_score(0.5, 3.0) == 1.0

    def test_full_credit_at_one_third(self):
        assert ConvenienceScorer.distance_score(1.0, 3.0) == 1.0

    def test_half_credit_at_two_thirds(self):
        assert ConvenienceScorer.distance_score(2.0, 3.0) == pytest.approx(0.5)

    def test_zero_at_max_distance(self):
        assert ConvenienceScorer.distance_score(3.0, 3.0) == pytest.approx(0.0)

    def test_zero_beyond_max_distance(self):
        assert ConvenienceScorer.distance_score(3.01, 3.0) == 0.0
        assert ConvenienceScorer.distance_score(100.0, 3.0) == 0.0

    def test_decay_is_linear(self):
        # 5 km radius: credit falls from 1 at 5/3 km to 0 at 5 km
        assert ConvenienceScorer.distance_score(10 / 3, 5.0) == pytest.approx(0.5)
        assert ConvenienceScorer.distance_score(25 / 6, 5.0) == pytest.approx(0.25)


class TestDensityScore:
    def test_ideal_count_saturates(self):
        assert ConvenienceScorer.density_score(3, 3) == 1.0

    def test_overabundance_is_capped(self):
        assert ConvenienceScorer.density_score(6, 3) == 1.0

    def test_partial_credit(self):
        assert ConvenienceScorer.density_score(1, 3) == pytest.approx(1 / 3)

    def test_no_places(self):
        assert ConvenienceScorer.density_score(0, 3) == 0.0


class TestVarietyScore:
    def test_distinct_types_are_unioned(self):
        places = [
            make_place(0, 0, ["hospital", "health"]),
            make_place(0, 0, ["hospital", "point_of_interest"]),
        ]
        assert ConvenienceScorer.variety_score(places) == pytest.approx(3 / 5)

    def test_missing_and_null_types_count_as_empty(self):
        places = [make_place(0, 0), make_place(0, 0, types=None), make_place(0, 0, ["atm"])]
        places[1]["types"] = None
        assert ConvenienceScorer.variety_score(places) == pytest.approx(1 / 5)

    def test_capped_at_one(self):
        places = [
            make_place(0, 0, [f"type_{i}_{j}" for j in range(5)])
            for i in range(10)
        ]
        assert ConvenienceScorer.variety_score(places) == 1.0

    def test_empty(self):
        assert ConvenienceScorer.variety_score([]) == 0.0

    def test_bare_string_is_one_tag(self):
        places = [make_place(0, 0, "hospital"), make_place(0, 0, ["hospital", "health"])]
        assert ConvenienceScorer.variety_score(places) == pytest.approx(2 / 5)

    @pytest.mark.parametrize("types", [[{"a": 1}], ["atm", 7], {"atm": True}, 42])
    def test_non_string_tags_rejected(self, types):
        places = [make_place(0, 0, ["atm"]), make_place(0, 0, types)]

        with pytest.raises(InvalidPlaceTypesError) as exc_info:
            ConvenienceScorer.variety_score(places)

        assert exc_info.value.index == 1


class TestCalculateScore:
    def test_empty_places_score_zero(self, scorer, origin):
        assert scorer.calculate_score([], "hospital", origin) == 0.0
        assert scorer.calculate_score([], "not-a-category", "0,0") == 0.0

    def test_hospital_example(self, scorer, origin):
        places = [
            make_place(origin["lat"], origin["lng"], ["hospital"]),
            make_place(origin["lat"], origin["lng"], ["health"]),
            make_place(origin["lat"], origin["lng"], ["doctor"]),
        ]
        # (1 * 0.4 + 1 * 0.4 + 0.6 * 0.2) * 10
        assert scorer.calculate_score(places, "hospital", origin) == 9.2

    def test_unknown_category_uses_default_profile(self, scorer):
        places = [make_place(0, 0, ["bakery"])]
        # (1 * 0.4 + 1/5 * 0.4 + 1/5 * 0.2) * 5 = 2.6
        assert scorer.calculate_score(places, "bakery", "0,0") == 2.6

    def test_far_places_only_earn_density_and_variety(self, scorer):
        places = [make_place(10, 10, ["atm"]) for _ in range(4)]
        # atm: weight 5, ideal 4 -> (0 + 1 * 0.4 + 0.2 * 0.2) * 5 = 2.2
        assert scorer.calculate_score(places, "atm", "0,0") == 2.2

    def test_score_rounded_to_one_decimal(self, scorer):
        places = [make_place(0, 0, ["pharmacy"])]
        # pharmacy: (0.4 + 0.25 * 0.4 + 0.2 * 0.2) * 8 = 4.32
        assert scorer.calculate_score(places, "pharmacy", "0,0") == 4.3

    def test_rounds_half_up(self):
        # round() would give 0.2 here
        assert _round_half_up(0.25) == 0.3
        assert _round_half_up(9.249) == 9.2

    def test_score_clamped_to_ten(self, origin):
        heavy = CategoryProfile(importance_weight=50, ideal_count=1, max_distance_km=5)
        scorer = ConvenienceScorer(profiles={"mega": heavy})
        places = [make_place(origin["lat"], origin["lng"], ["a", "b", "c", "d", "e"])]
        assert scorer.calculate_score(places, "mega", origin) == 10.0

    def test_accepts_string_locations(self, scorer):
        places = [{"geometry": {"location": "0,0"}, "types": ["atm"]}]
        assert scorer.calculate_score(places, "atm", "0,0") == scorer.calculate_score(
            [make_place(0, 0, ["atm"])], "atm", "0,0"
        )

    def test_does_not_mutate_places(self, scorer, origin):
        places = [make_place(origin["lat"], origin["lng"], ["hospital"])]
        snapshot = [dict(p) for p in places]
        scorer.calculate_score(places, "hospital", origin)
        assert places == snapshot

    def test_invalid_origin_raises(self, scorer):
        with pytest.raises(InvalidCoordinateError):
            scorer.calculate_score([make_place(0, 0)], "atm", "abc,def")

    def test_invalid_origin_raises_even_without_places(self, scorer):
        with pytest.raises(InvalidCoordinateError):
            scorer.calculate_score([], "atm", None)

    def test_missing_location_raises(self, scorer):
        places = [make_place(0, 0), {"name": "No geometry", "place_id": "abc"}]
        with pytest.raises(MissingLocationError) as excinfo:
            scorer.calculate_score(places, "atm", "0,0")
        assert excinfo.value.index == 1
        assert excinfo.value.place_id == "abc"

    def test_null_location_raises(self, scorer):
        with pytest.raises(MissingLocationError):
            scorer.calculate_score([{"geometry": {"location": None}}], "atm", "0,0")

    def test_malformed_place_location_raises(self, scorer):
        with pytest.raises(InvalidCoordinateError):
            scorer.calculate_score([{"geometry": {"location": "abc,def"}}], "atm", "0,0")

    def test_logs_final_score(self, scorer, caplog):
        with caplog.at_level(logging.INFO, logger="app.services.scoring"):
            scorer.calculate_score([], "atm", "0,0")
        assert "Calculated convenience score for atm: 0.0" in caplog.text


class TestScorerConfiguration:
    def test_exposes_registry_and_distance(self, scorer):
        assert scorer.profiles is PLACE_PROFILES
        assert scorer.distance is calculate_distance

    def test_profile_for(self, scorer):
        assert scorer.profile_for("school") is PLACE_PROFILES["school"]
        assert scorer.profile_for("zoo") is scorer.default_profile

    def test_place_distances_keep_input_order(self, scorer):
        places = [make_place(0, 1), make_place(0, 0)]
        distances = scorer.place_distances(places, "0,0")
        assert distances[1] == 0.0
        assert distances[0] == pytest.approx(111.19, abs=0.01)

    def test_get_scorer_is_singleton(self):
        assert get_scorer() is get_scorer()


class TestAnalyze:
    def test_returns_score_and_interpretation(self, scorer, origin):
        places = [
            make_place(origin["lat"], origin["lng"], [t])
            for t in ("hospital", "health", "doctor")
        ]
        result = scorer.analyze(places, "hospital", origin)
        assert isinstance(result, ConvenienceResult)
        assert result.score == 9.2
        assert result.interpretation.startswith("Excellent convenience")

    def test_empty_is_poor(self, scorer, origin):
        result = scorer.analyze([], "hospital", origin)
        assert result.score == 0.0
        assert result.interpretation.startswith("Poor")
