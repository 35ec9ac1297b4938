import pytest

from app.services.profiles import (
    DEFAULT_PROFILE,
    PLACE_PROFILES,
    CategoryProfile,
    get_profile,
    is_known_category,
)


def test_baseline_categories():
    assert set(PLACE_PROFILES) == {"hospital", "pharmacy", "restaurant", "store", "atm", "school"}


def test_hospital_profile():
    profile = get_profile("hospital")
    assert profile.importance_weight == 10
    assert profile.ideal_count == 3
    assert profile.max_distance_km == 5


def test_restaurant_is_weighted_lower_but_expected_in_abundance():
    restaurant = get_profile("restaurant")
    hospital = get_profile("hospital")
    assert restaurant.importance_weight < hospital.importance_weight
    assert restaurant.ideal_count > hospital.ideal_count


@pytest.mark.parametrize("category", ["bakery", "", "Hospital", "gym"])
def test_unknown_category_falls_back_to_default(category):
    profile = get_profile(category)
    assert profile is DEFAULT_PROFILE
    assert profile == CategoryProfile(importance_weight=5, ideal_count=5, max_distance_km=3)
    assert not is_known_category(category)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        PLACE_PROFILES["bakery"] = DEFAULT_PROFILE


def test_profiles_are_immutable():
    with pytest.raises(AttributeError):
        DEFAULT_PROFILE.ideal_count = 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"importance_weight": 0, "ideal_count": 1, "max_distance_km": 1},
        {"importance_weight": 1, "ideal_count": 0, "max_distance_km": 1},
        {"importance_weight": 1, "ideal_count": 1, "max_distance_km": -1},
    ],
)
def test_profile_rejects_non_positive_values(kwargs):
    with pytest.raises(ValueError):
        CategoryProfile(**kwargs)


def test_every_profile_is_positive():
    for profile in PLACE_PROFILES.values():
        assert profile.importance_weight > 0
        assert profile.ideal_count > 0
        assert profile.max_distance_km > 0


def test_to_dict():
    assert get_profile("atm").to_dict() == {
        "importance_weight": 5,
        "ideal_count": 4,
        "max_distance_km": 1,
    }
