"""
Unit tests for the review and analysis models.
"""

import pytest
from src.models.analysis import CompetitorAnalysis
from src.models.review import ReviewRecord, coerce_rating


def test_has_content_requires_one_field():
    assert not ReviewRecord().has_content()
    assert ReviewRecord(rating=3).has_content()
    assert ReviewRecord(reviewer_name="Ann").has_content()
    assert ReviewRecord(review_text="Nice").has_content()
    assert ReviewRecord(review_date="a day ago").has_content()


def test_source_must_be_set():
    with pytest.raises(ValueError):
        ReviewRecord(rating=4, source="")


def test_record_is_immutable():
    record = ReviewRecord(rating=4)
    with pytest.raises(AttributeError):
        record.rating = 5


@pytest.mark.parametrize("value, expected", [
    (4, 4),
    (4.0, 4),
    ("5", 5),
    (4.5, 4.5),
    (None, None),
    ("abc", None),
    (True, None),
    (float("nan"), None),
])
def test_coerce_rating(value, expected):
    assert coerce_rating(value) == expected


def test_from_dict_fills_defaults():
    record = ReviewRecord.from_dict({"review_text": "Fine"})

    assert record.source == "google_maps"
    assert record.raw_capture == {}
    assert record.rating is None


def test_empty_analysis_shape():
    analysis = CompetitorAnalysis(competitor_id="roma").to_dict()

    assert analysis["total_reviews"] == 0
    assert analysis["avg_rating"] is None
    assert analysis["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    assert analysis["sentiment_breakdown"] == {"positive": 0, "neutral": 0, "negative": 0}
    assert analysis["top_keywords"] == []
