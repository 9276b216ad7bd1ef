"""
Unit tests for the JSON review store.
"""

import json
import os
import tempfile

import pytest
from src.exceptions import StorageError
from src.models.review import ReviewRecord
from src.utils.storage import JsonReviewStore


def test_insert_and_fetch_reviews():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonReviewStore(tmpdir)
        store.insert_review("roma", ReviewRecord(rating=5, reviewer_name="Ann", review_text="Great"))
        store.insert_review("roma", ReviewRecord(review_date="2 weeks ago"))

        records = store.fetch_reviews("roma")

        assert len(records) == 2
        assert records[0].rating == 5
        assert records[0].reviewer_name == "Ann"
        assert records[1].review_date == "2 weeks ago"
        assert records[1].rating is None


def test_competitors_are_stored_separately():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonReviewStore(tmpdir)
        store.insert_review("roma", ReviewRecord(rating=4))

        assert store.fetch_reviews("napoli") == []
        assert os.path.exists(os.path.join(tmpdir, "reviews", "roma.json"))


def test_repeated_inserts_are_not_deduplicated():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonReviewStore(tmpdir)
        record = ReviewRecord(rating=3, reviewer_name="Bob")
        store.insert_review("roma", record)
        store.insert_review("roma", record)

        assert len(store.fetch_reviews("roma")) == 2


def test_refuses_record_without_fields():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonReviewStore(tmpdir)

        with pytest.raises(StorageError):
            store.insert_review("roma", ReviewRecord())

        assert store.fetch_reviews("roma") == []


def test_invalid_competitor_id_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonReviewStore(tmpdir)

        with pytest.raises(StorageError, match="Invalid competitor id"):
            store.insert_review(f"..{os.sep}escape", ReviewRecord(rating=1))


def test_corrupt_file_raises_storage_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonReviewStore(tmpdir)
        with open(os.path.join(store.reviews_dir, "roma.json"), 'w') as f:
            f.write("{not json")

        with pytest.raises(StorageError):
            store.fetch_reviews("roma")

        with pytest.raises(StorageError):
            store.insert_review("roma", ReviewRecord(rating=2))


def test_malformed_rows_are_tolerated():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonReviewStore(tmpdir)
        rows = [
            {"rating": "4", "review_text": "ok"},
            "garbage",
            {"rating": "n/a", "reviewer_name": "Zed"},
        ]
        with open(os.path.join(store.reviews_dir, "roma.json"), 'w') as f:
            json.dump(rows, f)

        records = store.fetch_reviews("roma")

        assert [r.rating for r in records] == [4, None]
        assert records[1].reviewer_name == "Zed"
