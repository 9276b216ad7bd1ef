"""
Competitor Analyzer.

Aggregates every stored review of a competitor into a CompetitorAnalysis:
rating distribution and average, sentiment breakdown, top keywords and the
most positive / most negative snippets.
"""

import logging
import math
from collections import Counter
from typing import Iterable, List, Optional

import config.settings as settings
from src.models.analysis import CompetitorAnalysis, empty_distribution
from src.models.review import ReviewRecord, ScoredReview, coerce_rating
from src.utils.sentiment import LexiconSentimentScorer
from src.utils.storage import ReviewStore
from src.utils.text_cleaning import clean_review_text, tokenize

logger = logging.getLogger(__name__)


def _percentage(count: int, total: int) -> int:
    """Integer percentage, rounded half up."""
    return int(math.floor(count * 100 / total + 0.5))


def _rating_bucket(rating) -> str:
    return str(int(math.floor(rating + 0.5)))


def analyze_records(
    competitor_id: str,
    records: Iterable[ReviewRecord],
    scorer: LexiconSentimentScorer,
    positive_threshold: int = settings.POSITIVE_THRESHOLD,
    negative_threshold: int = settings.NEGATIVE_THRESHOLD,
    keyword_limit: int = settings.TOP_KEYWORDS_LIMIT,
    snippet_limit: int = settings.TOP_SNIPPETS_LIMIT
) -> CompetitorAnalysis:
    """
    Build a CompetitorAnalysis from a set of review records.

    Pure function of its inputs: same records in, identical analysis out.

    Args:
        competitor_id: Competitor the records belong to
        records: Stored review records (order only affects keyword ties)
        scorer: Lexicon sentiment scorer
        positive_threshold: Scores above this are positive
        negative_threshold: Scores below this are negative
        keyword_limit: Number of keywords to return
        snippet_limit: Number of snippets per sentiment to return

    Returns:
        CompetitorAnalysis (zero-valued if there are no records)
    """
    records = list(records)
    total_reviews = len(records)

    if total_reviews == 0:
        return CompetitorAnalysis(competitor_id=competitor_id)

    rating_sum = 0.0
    rated_count = 0
    rating_distribution = empty_distribution()

    sentiment_counts = Counter()
    positive_reviews: List[ScoredReview] = []
    negative_reviews: List[ScoredReview] = []

    keyword_freq = Counter()

    for record in records:
        rating = coerce_rating(record.rating) or 0
        text = clean_review_text(record.review_text)

        # Rating stats
        if 1 <= rating <= 5:
            rating_sum += rating
            rated_count += 1
            rating_distribution[_rating_bucket(rating)] += 1

        # Sentiment
        score = scorer.score(text)
        if score > positive_threshold:
            sentiment_counts["positive"] += 1
            positive_reviews.append(ScoredReview(text=text, score=score, rating=rating))
        elif score < negative_threshold:
            sentiment_counts["negative"] += 1
            negative_reviews.append(ScoredReview(text=text, score=score, rating=rating))
        else:
            sentiment_counts["neutral"] += 1

        # Keywords
        keyword_freq.update(tokenize(text))

    avg_rating = round(rating_sum / rated_count, 2) if rated_count else None

    sentiment_breakdown = {
        bucket: _percentage(sentiment_counts[bucket], total_reviews)
        for bucket in ("positive", "neutral", "negative")
    }

    # Stable sort: equal counts keep first-seen order
    ranked = sorted(keyword_freq.items(), key=lambda kv: kv[1], reverse=True)
    top_keywords = [word for word, _ in ranked[:keyword_limit]]

    positive_reviews.sort(key=lambda r: r.score, reverse=True)
    negative_reviews.sort(key=lambda r: r.score)

    analysis = CompetitorAnalysis(
        competitor_id=competitor_id,
        total_reviews=total_reviews,
        avg_rating=avg_rating,
        rating_distribution=rating_distribution,
        sentiment_breakdown=sentiment_breakdown,
        top_keywords=top_keywords,
        top_positive_snippets=[r.text for r in positive_reviews[:snippet_limit]],
        top_negative_snippets=[r.text for r in negative_reviews[:snippet_limit]]
    )

    logger.info(
        f"Analyzed {total_reviews} reviews for {competitor_id} "
        f"(avg rating: {avg_rating}, sentiment: {sentiment_breakdown})"
    )
    return analysis


class CompetitorAnalyzer:
    """
    Reads a competitor's stored reviews and summarizes them.

    Read-only and stateless between calls: nothing is cached, so every
    analyze() reflects the store's current contents.
    """

    def __init__(self, store: ReviewStore, scorer: Optional[LexiconSentimentScorer] = None):
        """
        Args:
            store: Review store to read from
            scorer: Sentiment scorer (default: VADER-lexicon scorer)
        """
        self.store = store
        self.scorer = scorer or LexiconSentimentScorer()

    def analyze(self, competitor_id: str) -> CompetitorAnalysis:
        """
        Analyze all stored reviews for a competitor.

        Raises:
            StorageError: If the store cannot be read
        """
        records = self.store.fetch_reviews(competitor_id)
        return analyze_records(competitor_id, records, self.scorer)
