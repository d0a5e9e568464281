"""
Scrape League Data Script
Scrapes fixtures and standings for every configured league and stores them,
the same way the admin scrape endpoints do. Meant for a nightly job.

Usage: python -m clubhub.scripts.scrape_league_data [--fixtures-only | --standings-only]
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from clubhub.database.supabase_client import get_service_supabase
from clubhub.modules.fixtures.service import FixtureService
from clubhub.modules.standings.service import StandingsService
from clubhub.scraper.lff_scraper import LFFScraper
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Main function to scrape and store league data"""
    args = sys.argv[1:]
    try:
        supabase = get_service_supabase()
        scraper = LFFScraper()

        if "--standings-only" not in args:
            result = FixtureService(supabase, scraper).scrape_fixtures(owner_id=None)
            logger.info(result["message"])

        if "--fixtures-only" not in args:
            result = StandingsService(supabase, scraper).scrape_standings()
            logger.info(result["message"])

        logger.info("Scraping completed successfully!")
    except Exception as e:
        logger.error(f"Error during scraping: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
