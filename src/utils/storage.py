"""
Storage utility.

Review persistence: the ReviewStore interface the scraper and analyzer talk
to, and a JSON-file implementation (one file per competitor).
"""

import json
import os
import logging
import tempfile
from abc import ABC, abstractmethod
from typing import List

from src.exceptions import StorageError
from src.models.review import ReviewRecord

logger = logging.getLogger(__name__)


class ReviewStore(ABC):
    """Persistence collaborator for review records."""

    @abstractmethod
    def insert_review(self, competitor_id: str, record: ReviewRecord) -> None:
        """
        Persist one review record.

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def fetch_reviews(self, competitor_id: str) -> List[ReviewRecord]:
        """
        Return all stored records for a competitor (empty if none).

        Raises:
            StorageError: If the read fails
        """


class JsonReviewStore(ReviewStore):
    """
    Stores reviews as JSON arrays under data_root/reviews/<competitor_id>.json.

    Records are appended; nothing is ever deduplicated or deleted.
    """

    def __init__(self, data_root: str):
        """
        Initialize review store.

        Args:
            data_root: Root data directory (e.g., /path/to/data)
        """
        self.data_root = str(data_root)
        self.reviews_dir = os.path.join(self.data_root, "reviews")

        os.makedirs(self.reviews_dir, exist_ok=True)

        logger.info(f"Initialized JsonReviewStore with data_root={self.data_root}")

    def _path_for(self, competitor_id: str) -> str:
        if not competitor_id or os.sep in competitor_id or competitor_id in (".", ".."):
            raise StorageError(f"Invalid competitor id: {competitor_id!r}")
        return os.path.join(self.reviews_dir, f"{competitor_id}.json")

    def _read(self, filepath: str) -> List[dict]:
        if not os.path.exists(filepath):
            return []
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {filepath}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Unexpected content in {filepath}: expected a list")
        return data

    def insert_review(self, competitor_id: str, record: ReviewRecord) -> None:
        if not record.has_content():
            raise StorageError("Refusing to store a review with no extracted fields")

        filepath = self._path_for(competitor_id)
        rows = self._read(filepath)
        rows.append(record.to_dict())

        # Write to a temp file first so a crash never truncates existing reviews
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.reviews_dir, suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(rows, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, filepath)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save review for {competitor_id}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f"Failed to write {filepath}: {e}") from e

        logger.debug(f"Saved review #{len(rows)} for {competitor_id}")

    def fetch_reviews(self, competitor_id: str) -> List[ReviewRecord]:
        filepath = self._path_for(competitor_id)
        rows = self._read(filepath)

        records = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning(f"Skipping malformed row in {filepath}: {row!r}")
                continue
            records.append(ReviewRecord.from_dict(row))

        logger.debug(f"Loaded {len(records)} reviews for {competitor_id}")
        return records
