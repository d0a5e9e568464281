from supabase import Client
from clubhub.modules.standings.schemas import StandingsResponse
from clubhub.config.leagues import get_league_key
from clubhub.core.dates import utcnow
from clubhub.database.supabase_client import row_or_none, rows
from clubhub.scraper.lff_scraper import LFFScraper
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class StandingsService:
    def __init__(self, supabase: Client, scraper: Optional[LFFScraper] = None):
        self.supabase = supabase
        self.scraper = scraper

    def scrape_standings(self) -> Dict[str, Any]:
        """Scrape each league table and upsert one row per league"""
        scraper = self.scraper or LFFScraper()
        stored = []
        for league_data in scraper.scrape_all_standings():
            league = league_data["league"]
            try:
                self.supabase.table("standings").upsert({
                    "league_key": league["league_key"],
                    "league_name": league["name"],
                    "standings_data": league_data["standings"],
                    "last_updated": utcnow().isoformat(),
                }, on_conflict="league_key").execute()
            except Exception as e:
                logger.error(f"Error storing {league['name']} standings: {e}")
                continue
            logger.info(f"Stored {league['name']} standings")
            stored.append({
                "league": league["name"],
                "league_key": league["league_key"],
                "teams": len(league_data["standings"]),
            })
        return {
            "success": True,
            "leagues": stored,
            "message": f"Scraped {len(stored)} leagues successfully",
        }

    def list_standings(self, league: Optional[str] = None) -> List[StandingsResponse]:
        try:
            query = self.supabase.table("standings").select("*")
            if league:
                query = query.eq("league_key", get_league_key(league))
            return [StandingsResponse(**row) for row in rows(query.order("league_key").execute())]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_standings(self, league_key: str) -> StandingsResponse:
        try:
            row = row_or_none(
                self.supabase.table("standings").select("*").eq("league_key", league_key).maybe_single().execute()
            )
            if not row:
                raise HTTPException(status_code=404, detail="Standings not found")
            return StandingsResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
