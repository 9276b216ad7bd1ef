"""
Lexicon sentiment scorer.

Maps review text to a signed integer score by summing per-word valences
from a fixed dictionary (the NLTK VADER lexicon by default).
"""

import logging
import math
import re
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

NEGATORS = frozenset([
    "not", "no", "never", "none", "nobody", "nothing", "neither", "nor",
    "cannot", "can't", "don't", "doesn't", "didn't", "isn't", "wasn't",
    "aren't", "weren't", "won't", "wouldn't", "shouldn't", "couldn't",
])

_WORD = re.compile(r"[a-z0-9']+")


def ensure_vader_downloaded() -> None:
    """Ensure the NLTK 'vader_lexicon' resource is available; download if missing."""
    import nltk
    try:
        nltk.data.find("sentiment/vader_lexicon.zip")
    except LookupError:
        logger.info("Downloading NLTK resource: 'vader_lexicon' ...")
        nltk.download("vader_lexicon", quiet=True)


def load_vader_lexicon() -> Dict[str, float]:
    """Load the VADER word -> valence dictionary from NLTK."""
    ensure_vader_downloaded()
    from nltk.sentiment.vader import SentimentIntensityAnalyzer

    return dict(SentimentIntensityAnalyzer().lexicon)


def _integer_valence(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class LexiconSentimentScorer:
    """
    Scores text by summing integer word valences.

    A valence word directly preceded by a negator ("not good") counts with
    its sign flipped.
    """

    def __init__(self, lexicon: Optional[Dict[str, float]] = None):
        """
        Args:
            lexicon: word -> valence mapping. Defaults to the VADER lexicon.
        """
        if lexicon is None:
            lexicon = load_vader_lexicon()
            logger.info(f"Loaded VADER lexicon ({len(lexicon)} words)")

        self.lexicon: Dict[str, int] = {
            word.lower(): _integer_valence(float(valence))
            for word, valence in lexicon.items()
        }

    def tokens(self, text: str) -> List[str]:
        return _WORD.findall(text.lower())

    def score(self, text: str) -> int:
        """
        Compute the signed sentiment score of a text.

        Args:
            text: Cleaned review text (may be empty)

        Returns:
            Sum of word valences; 0 for empty or neutral text
        """
        if not text:
            return 0

        total = 0
        previous = None
        for token in self.tokens(text):
            valence = self.lexicon.get(token, 0)
            if valence and previous in NEGATORS:
                valence = -valence
            total += valence
            previous = token
        return total
