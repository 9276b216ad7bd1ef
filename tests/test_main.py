"""
Tests for the command-line entry point.
"""

import json
import tempfile
from unittest.mock import patch

import pytest
from main import build_parser, run_analyze, run_scrape
from src.models.review import ReviewRecord
from src.utils.sentiment import LexiconSentimentScorer
from src.utils.storage import JsonReviewStore
from tests.fakes import TEST_LEXICON


def test_scrape_arguments():
    args = build_parser().parse_args([
        "scrape", "--competitor", "roma", "--url", "https://maps.example.com/roma", "--max-reviews", "20"
    ])

    assert args.command == "scrape"
    assert args.competitor == "roma"
    assert args.max_reviews == 20


def test_scrape_requires_url():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["scrape", "--competitor", "roma"])


def test_analyze_defaults():
    args = build_parser().parse_args(["analyze", "--competitor", "roma"])

    assert args.command == "analyze"
    assert args.export is False


def test_run_scrape_reports_inserted_count(capsys):
    args = build_parser().parse_args([
        "scrape", "--competitor", "roma", "--url", "https://maps.example.com/roma"
    ])

    with patch('src.agents.scraping.ReviewScraper.scrape', return_value=4) as scrape:
        assert run_scrape(args) == 4

    scrape.assert_called_once_with("roma", "https://maps.example.com/roma", args.max_reviews)
    assert json.loads(capsys.readouterr().out) == {"competitor_id": "roma", "reviews_inserted": 4}


def test_run_analyze_exports_from_store(capsys):
    with tempfile.TemporaryDirectory() as data_root, tempfile.TemporaryDirectory() as output_dir:
        store = JsonReviewStore(data_root)
        store.insert_review("roma", ReviewRecord(rating=5, review_text="Great pizza"))
        store.insert_review("roma", ReviewRecord(rating=3, review_text="Slow service"))

        args = build_parser().parse_args([
            "analyze", "--competitor", "roma", "--data-root", data_root,
            "--export", "--output-dir", output_dir
        ])
        scorer = LexiconSentimentScorer(lexicon=TEST_LEXICON)
        with patch('src.agents.analysis.LexiconSentimentScorer', return_value=scorer):
            result = run_analyze(args)

        assert result["total_reviews"] == 2
        assert result["avg_rating"] == 4.0
        assert result["sentiment_breakdown"] == {"positive": 50, "neutral": 0, "negative": 50}
        assert "analysis_roma.json" in capsys.readouterr().out
