"""
ReviewScout - Competitor Review Intelligence

CLI entry point for scraping competitor reviews and analyzing them.
"""

import argparse
import json
import logging
import sys

import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ReviewScout - Competitor Review Intelligence",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape up to 20 reviews from a Google Maps listing
  python main.py scrape --competitor pizza-roma \\
                        --url "https://www.google.com/maps/place/..." \\
                        --max-reviews 20

  # Summarize everything stored for a competitor and export it
  python main.py analyze --competitor pizza-roma --export
        """
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--competitor",
        required=True,
        help="Competitor identifier the reviews are stored under"
    )
    common.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )
    common.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape = subparsers.add_parser("scrape", parents=[common], help="Scrape a review page")
    scrape.add_argument("--url", required=True, help="Public review page URL")
    scrape.add_argument(
        "--max-reviews",
        type=int,
        default=settings.DEFAULT_MAX_REVIEWS,
        help=f"Maximum review items to process (default: {settings.DEFAULT_MAX_REVIEWS})"
    )

    analyze = subparsers.add_parser("analyze", parents=[common], help="Analyze stored reviews")
    analyze.add_argument(
        "--export",
        action="store_true",
        help="Also write the analysis JSON and a reviews CSV"
    )
    analyze.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Export directory (default: {settings.OUTPUT_ROOT})"
    )

    return parser


def run_scrape(args) -> int:
    from src.agents.scraping import ReviewScraper
    from src.utils.storage import JsonReviewStore

    scraper = ReviewScraper(store=JsonReviewStore(args.data_root))
    inserted = scraper.scrape(args.competitor, args.url, args.max_reviews)
    print(json.dumps({"competitor_id": args.competitor, "reviews_inserted": inserted}))
    return inserted


def run_analyze(args) -> dict:
    from src.agents.analysis import CompetitorAnalyzer
    from src.agents.export import AnalysisExporter
    from src.utils.storage import JsonReviewStore

    store = JsonReviewStore(args.data_root)
    analysis = CompetitorAnalyzer(store).analyze(args.competitor)
    print(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False))

    if args.export:
        paths = AnalysisExporter().export(analysis, store.fetch_reviews(args.competitor), args.output_dir)
        print(f"Analysis: {paths['analysis']}")
        print(f"Reviews: {paths['reviews']}")

    return analysis.to_dict()


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        if args.command == "scrape":
            run_scrape(args)
        else:
            run_analyze(args)

        logger.info(f"ReviewScout {args.command} completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning(f"{args.command} interrupted by user")
        print("\n⚠️  Interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"{args.command} failed: {e}", exc_info=True)
        print(f"\n❌ {args.command} failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
