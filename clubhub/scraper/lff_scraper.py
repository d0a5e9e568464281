"""
Sequential scraping of the configured leagues.

Each public method fetches pages one after another, parses them into plain
dicts and leaves persistence to the calling service. A failing league is
logged and skipped so one broken page does not abort the whole run.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from clubhub.config import settings
from clubhub.config.leagues import LEAGUES
from clubhub.scraper.fixtures_parser import parse_fixtures
from clubhub.scraper.http_client import HttpError, fetch
from clubhub.scraper.match_parser import parse_match_events, parse_match_statistics
from clubhub.scraper.standings_parser import parse_standings

logger = logging.getLogger(__name__)


class LFFScraper:
    def __init__(self, fetcher: Optional[Callable[[str], str]] = None,
                 leagues: Optional[List[Dict[str, Any]]] = None,
                 delay_seconds: Optional[float] = None):
        self._session = requests.Session()
        self.fetch = fetcher or (lambda url: fetch(url, session=self._session))
        self.leagues = leagues if leagues is not None else LEAGUES
        self.delay_seconds = settings.scraper_delay_seconds if delay_seconds is None else delay_seconds
        self.club_name = settings.club_name

    def scrape_standings(self, league: Dict[str, Any]) -> List[Dict[str, Any]]:
        logger.info("Scraping standings for %s from %s", league["name"], league["standings_url"])
        html = self.fetch(league["standings_url"])
        standings = parse_standings(html, league["name"])
        logger.info("Scraped %d teams for %s", len(standings), league["name"])
        return standings

    def scrape_all_standings(self) -> List[Dict[str, Any]]:
        results = []
        for league in self.leagues:
            try:
                standings = self.scrape_standings(league)
            except HttpError as e:
                logger.error("Failed to scrape standings for %s: %s", league["name"], e)
                continue
            if standings:
                results.append({"league": league, "standings": standings})
        return results

    def scrape_fixtures(self, league: Dict[str, Any]) -> List[Dict[str, Any]]:
        logger.info("Scraping fixtures for %s from %s", league["name"], league["fixtures_url"])
        html = self.fetch(league["fixtures_url"])
        fixtures = parse_fixtures(html, league["name"], self.club_name)
        logger.info("Scraped %d club fixtures for %s", len(fixtures), league["name"])
        return fixtures

    def enrich_with_match_details(self, fixture: Dict[str, Any]) -> Dict[str, Any]:
        """Statistics and events for a completed match with a match page"""
        if not fixture.get("match_url") or fixture.get("status") != "completed":
            return fixture
        try:
            html = self.fetch(fixture["match_url"])
        except HttpError as e:
            logger.error("Failed to fetch match page %s: %s", fixture["match_url"], e)
            return fixture
        statistics = parse_match_statistics(html)
        if statistics:
            fixture["statistics"] = statistics
        events = parse_match_events(html)
        if events:
            fixture["events"] = events
        return fixture

    def scrape_all_fixtures(self, with_statistics: bool = True) -> List[Dict[str, Any]]:
        results = []
        for league in self.leagues:
            try:
                fixtures = self.scrape_fixtures(league)
            except HttpError as e:
                logger.error("Failed to scrape fixtures for %s: %s", league["name"], e)
                continue
            if not fixtures:
                continue
            if with_statistics:
                for fixture in fixtures:
                    if fixture.get("match_url") and fixture.get("status") == "completed":
                        self.enrich_with_match_details(fixture)
                        time.sleep(self.delay_seconds)
            results.append({"league": league, "fixtures": fixtures})
        return results
