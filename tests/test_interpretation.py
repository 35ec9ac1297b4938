import pytest

from app.services.scoring import interpret_score


@pytest.mark.parametrize(
    "score, prefix",
    [
        (10.0, "Excellent convenience"),
        (9.0, "Excellent convenience"),
        (8.9999, "Very Good"),
        (7.0, "Very Good"),
        (6.9, "Good"),
        (5.0, "Good"),
        (4.99, "Fair"),
        (3.0, "Fair"),
        (2.9999, "Poor"),
        (0.0, "Poor"),
    ],
)
def test_band_edges(score, prefix):
    assert interpret_score(score).startswith(prefix)


def test_out_of_range_falls_to_nearest_band():
    assert interpret_score(42).startswith("Excellent")
    assert interpret_score(-1).startswith("Poor")


def test_full_labels():
    assert interpret_score(9.5) == "Excellent convenience - Exceptional access to amenities"
    assert interpret_score(1.0) == "Poor - Minimal access to amenities"
