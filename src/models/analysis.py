"""
Competitor analysis model.

Aggregate summary computed from all stored reviews of one competitor.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

RATING_BUCKETS = ("1", "2", "3", "4", "5")
SENTIMENT_BUCKETS = ("positive", "neutral", "negative")


def empty_distribution() -> Dict[str, int]:
    return {bucket: 0 for bucket in RATING_BUCKETS}


def empty_sentiment() -> Dict[str, int]:
    return {bucket: 0 for bucket in SENTIMENT_BUCKETS}


@dataclass
class CompetitorAnalysis:
    """
    Business-intelligence summary for one competitor.

    Built fresh on every call from the stored review set; never cached.
    """
    competitor_id: str
    total_reviews: int = 0
    avg_rating: Optional[float] = None  # 2 decimals, None without valid ratings
    rating_distribution: Dict[str, int] = field(default_factory=empty_distribution)
    sentiment_breakdown: Dict[str, int] = field(default_factory=empty_sentiment)  # percentages
    top_keywords: List[str] = field(default_factory=list)
    top_positive_snippets: List[str] = field(default_factory=list)
    top_negative_snippets: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "competitor_id": self.competitor_id,
            "total_reviews": self.total_reviews,
            "avg_rating": self.avg_rating,
            "rating_distribution": dict(self.rating_distribution),
            "sentiment_breakdown": dict(self.sentiment_breakdown),
            "top_keywords": list(self.top_keywords),
            "top_positive_snippets": list(self.top_positive_snippets),
            "top_negative_snippets": list(self.top_negative_snippets)
        }
