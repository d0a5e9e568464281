from supabase import Client
from clubhub.modules.fixtures.schemas import FixtureResponse, FixtureUpdate, MatchCreate
from clubhub.config import settings
from clubhub.config.leagues import get_league_key
from clubhub.core.dates import utcnow
from clubhub.database.supabase_client import row_or_none, rows
from clubhub.scraper.lff_scraper import LFFScraper
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import json
import logging
import uuid

logger = logging.getLogger(__name__)


def fixture_row(fixture: Dict[str, Any], league_key: str, owner_id: Optional[str]) -> Dict[str, Any]:
    """Database row for a scraped fixture; new rows start as drafts"""
    now = utcnow().isoformat()
    return {
        "fingerprint": fixture["fingerprint"],
        "match_date": fixture.get("date"),
        "match_time": fixture.get("time"),
        "team1": fixture["home_team"]["name"],
        "team2": fixture["away_team"]["name"],
        "team1_score": fixture.get("home_score"),
        "team2_score": fixture.get("away_score"),
        "team1_logo": fixture["home_team"].get("logo"),
        "team2_logo": fixture["away_team"].get("logo"),
        "venue": fixture.get("stadium"),
        "league_key": league_key,
        "status": fixture.get("status"),
        "round": fixture.get("round"),
        "lff_url_slug": fixture.get("match_url") or "",
        "statistics": json.dumps(fixture["statistics"]) if fixture.get("statistics") else None,
        "events": json.dumps(fixture["events"]) if fixture.get("events") else None,
        "owner_id": owner_id,
        "is_draft": True,
        "created_at": now,
        "updated_at": now,
    }


def decode_json_fields(fixture: Dict[str, Any]) -> Dict[str, Any]:
    """statistics/events are stored as JSON text"""
    decoded = dict(fixture)
    for key, empty in (("statistics", {}), ("events", [])):
        value = decoded.get(key)
        if isinstance(value, str):
            try:
                decoded[key] = json.loads(value)
            except ValueError:
                logger.error(f"Unreadable {key} on fixture {fixture.get('fingerprint')}")
                decoded[key] = empty
    return decoded


class FixtureService:
    def __init__(self, supabase: Client, scraper: Optional[LFFScraper] = None):
        self.supabase = supabase
        self.scraper = scraper

    def scrape_fixtures(self, owner_id: Optional[str]) -> Dict[str, Any]:
        """Scrape every league, then upsert all club fixtures on their fingerprint"""
        scraper = self.scraper or LFFScraper()
        scraped = scraper.scrape_all_fixtures(with_statistics=True)

        fixture_rows = []
        leagues = []
        for league_data in scraped:
            league = league_data["league"]
            league_rows = [fixture_row(f, league["league_key"], owner_id) for f in league_data["fixtures"]]
            fixture_rows.extend(league_rows)
            leagues.append({"league": league["name"], "league_key": league["league_key"], "fixtures": len(league_rows)})

        if not fixture_rows:
            return {"success": False, "total": 0, "leagues": leagues, "message": "No fixtures found"}

        try:
            self.supabase.table("fixtures_all_new").upsert(fixture_rows, on_conflict="fingerprint").execute()
        except Exception as e:
            logger.error(f"Error saving fixtures: {e}")
            raise HTTPException(status_code=500, detail="Failed to save fixtures to database")

        logger.info(f"Successfully scraped and saved {len(fixture_rows)} fixtures")
        return {
            "success": True,
            "total": len(fixture_rows),
            "leagues": leagues,
            "message": f"Successfully scraped {len(fixture_rows)} fixtures",
        }

    def list_fixtures(self, league: Optional[str] = None, newest_first: bool = False) -> List[FixtureResponse]:
        try:
            query = self.supabase.table("fixtures_all_new").select("*")
            if league:
                query = query.eq("league_key", get_league_key(league))
            result = query.order("match_date", desc=newest_first).execute()
            return [FixtureResponse(**decode_json_fields(row)) for row in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_fixture(self, fingerprint: str) -> FixtureResponse:
        try:
            fixture = row_or_none(
                self.supabase.table("fixtures_all_new")
                .select("*")
                .eq("fingerprint", fingerprint)
                .maybe_single()
                .execute()
            )
            if not fixture:
                raise HTTPException(status_code=404, detail="Fixture not found")
            return FixtureResponse(**decode_json_fields(fixture))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_fixture(self, fingerprint: str, fixture_data: FixtureUpdate,
                       owner_id: Optional[str] = None) -> FixtureResponse:
        """Edit a fixture; with owner_id only the owner's rows match"""
        update_data = fixture_data.model_dump(mode="json", exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = utcnow().isoformat()
        try:
            query = self.supabase.table("fixtures_all_new").update(update_data).eq("fingerprint", fingerprint)
            if owner_id:
                query = query.eq("owner_id", owner_id)
            fixture = row_or_none(query.execute())
            if not fixture:
                raise HTTPException(status_code=404, detail="Fixture not found")
            return FixtureResponse(**decode_json_fields(fixture))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_fixture(self, fingerprint: str, owner_id: Optional[str] = None) -> None:
        try:
            query = self.supabase.table("fixtures_all_new").delete().eq("fingerprint", fingerprint)
            if owner_id:
                query = query.eq("owner_id", owner_id)
            if not rows(query.execute()):
                raise HTTPException(status_code=404, detail="Fixture not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_match(self, match_data: MatchCreate, owner_id: str) -> FixtureResponse:
        """Manually entered match; gets a random fingerprint"""
        try:
            data = match_data.model_dump(mode="json")
            data.update({"fingerprint": str(uuid.uuid4()), "owner_id": owner_id, "lff_url_slug": ""})
            match = row_or_none(self.supabase.table("fixtures_all_new").insert(data).execute())
            if not match:
                raise HTTPException(status_code=500, detail="Failed to create match")
            return FixtureResponse(**match)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def upcoming_match(self) -> Optional[FixtureResponse]:
        """Next club match on or after today"""
        today = utcnow().date().isoformat()
        club = settings.club_name
        try:
            result = self.supabase.table("fixtures_all_new")\
                .select("*")\
                .or_(f"team1.ilike.%{club}%,team2.ilike.%{club}%")\
                .gte("match_date", today)\
                .order("match_date")\
                .order("match_time")\
                .limit(1)\
                .execute()
            match = row_or_none(result)
            return FixtureResponse(**decode_json_fields(match)) if match else None
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
