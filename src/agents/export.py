"""
Analysis Exporter.

Writes a competitor analysis (JSON) and the reviews behind it (CSV) to an
output directory.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, List

import pandas as pd

from src.models.analysis import CompetitorAnalysis
from src.models.review import ReviewRecord

logger = logging.getLogger(__name__)

REVIEW_COLUMNS = ["reviewer_name", "rating", "review_date", "review_text", "source"]


class AnalysisExporter:
    """Saves analysis_<competitor>.json and reviews_<competitor>.csv."""

    def export(
        self,
        analysis: CompetitorAnalysis,
        records: List[ReviewRecord],
        output_dir: str
    ) -> Dict[str, str]:
        """
        Export an analysis and its reviews.

        Args:
            analysis: Result of CompetitorAnalyzer.analyze()
            records: The stored reviews the analysis was computed from
            output_dir: Directory to write into (created if missing)

        Returns:
            {"analysis": <json path>, "reviews": <csv path>}
        """
        os.makedirs(output_dir, exist_ok=True)
        competitor_id = analysis.competitor_id

        rows = [{column: record.to_dict()[column] for column in REVIEW_COLUMNS} for record in records]
        df = pd.DataFrame(rows, columns=REVIEW_COLUMNS)
        if not df.empty:
            df = df.sort_values("rating", ascending=False, na_position="last", kind="stable")

        reviews_path = os.path.join(output_dir, f"reviews_{competitor_id}.csv")
        df.to_csv(reviews_path, index=False)
        logger.info(f"Reviews saved to {reviews_path} ({len(df)} rows)")

        analysis_path = os.path.join(output_dir, f"analysis_{competitor_id}.json")
        payload = analysis.to_dict()
        payload["generated_at"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        with open(analysis_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.info(f"Analysis saved to {analysis_path}")

        return {"analysis": analysis_path, "reviews": reviews_path}
