from supabase import Client
from clubhub.modules.players.schemas import PlayerCreate, PlayerUpdate, PlayerResponse
from clubhub.config.leagues import LEAGUES
from clubhub.core.browser import fetch_rendered_html
from clubhub.core.dates import utcnow
from clubhub.database.supabase_client import row_or_none, rows
from clubhub.scraper.roster_parser import parse_roster
from typing import Any, Awaitable, Callable, Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

PLAYERS_TABLE = "banga_playerss"
NIL_UUID = "00000000-0000-0000-0000-000000000000"


def latest_per_player(players: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep the most recently inserted row for each (name, team_key)"""
    ordered = sorted(players, key=lambda p: p.get("inserted_at") or "", reverse=True)
    seen = set()
    unique = []
    for player in ordered:
        key = (player.get("name"), player.get("team_key"))
        if key in seen:
            continue
        seen.add(key)
        unique.append(player)
    return unique


class PlayerService:
    def __init__(self, supabase: Client,
                 page_loader: Optional[Callable[[str], Awaitable[str]]] = None):
        self.supabase = supabase
        self.page_loader = page_loader or fetch_rendered_html

    def list_players(self, team_key: Optional[str] = None) -> List[PlayerResponse]:
        try:
            query = self.supabase.table(PLAYERS_TABLE).select("*")
            if team_key and team_key != "all":
                query = query.eq("team_key", team_key)
            result = query.order("name").execute()
            return [PlayerResponse(**row) for row in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_player(self, player_data: PlayerCreate) -> PlayerResponse:
        try:
            data = player_data.model_dump()
            data["inserted_at"] = utcnow().isoformat()
            player = row_or_none(self.supabase.table(PLAYERS_TABLE).insert(data).execute())
            if not player:
                raise HTTPException(status_code=500, detail="Failed to create player")
            return PlayerResponse(**player)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_player(self, player_id: str, player_data: PlayerUpdate) -> PlayerResponse:
        update_data = player_data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        try:
            player = row_or_none(
                self.supabase.table(PLAYERS_TABLE).update(update_data).eq("id", player_id).execute()
            )
            if not player:
                raise HTTPException(status_code=404, detail="Player not found")
            return PlayerResponse(**player)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_player(self, player_id: str) -> None:
        try:
            result = self.supabase.table(PLAYERS_TABLE).delete().eq("id", player_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Player not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def scrape_rosters(self, leagues: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
        """Roster pages are rendered client-side, so each one goes through the browser"""
        scraped = []
        for league in leagues if leagues is not None else LEAGUES:
            if not league.get("players_url"):
                continue
            try:
                html = await self.page_loader(league["players_url"])
            except Exception as e:
                logger.error(f"Failed to load roster for {league['team_key']}: {e}")
                continue
            players = parse_roster(html, league["team_key"])
            logger.info(f"Found {len(players)} players for {league['team_key']}")
            scraped.extend(players)
        return scraped

    async def scrape_players(self) -> Dict[str, Any]:
        scraped = await self.scrape_rosters()
        if not scraped:
            raise HTTPException(
                status_code=404,
                detail={"error": "No players found during scraping", "scrapedCount": 0},
            )

        now = utcnow().isoformat()
        to_upsert = [{**player, "inserted_at": now} for player in scraped]
        try:
            result = self.supabase.table(PLAYERS_TABLE)\
                .upsert(to_upsert, on_conflict="name,team_key")\
                .execute()
        except Exception as e:
            logger.error(f"Error inserting players: {e}")
            raise HTTPException(status_code=500, detail="Failed to scrape players")

        inserted = rows(result)
        logger.info(f"Successfully inserted/updated {len(inserted)} players")
        return {
            "success": True,
            "scrapedCount": len(scraped),
            "insertedCount": len(inserted),
            "players": inserted,
        }

    def clean_all(self) -> None:
        """Wipe the roster table ahead of a fresh scrape"""
        try:
            self.supabase.table(PLAYERS_TABLE).delete().neq("id", NIL_UUID).execute()
        except Exception as e:
            logger.error(f"Error deleting players: {e}")
            raise HTTPException(status_code=500, detail="Failed to clean database")

    def _count(self) -> int:
        result = self.supabase.table(PLAYERS_TABLE).select("id", count="exact").execute()
        return result.count if result.count is not None else len(rows(result))

    def clean_duplicates(self) -> Dict[str, Any]:
        """Rewrite the table with one row per (name, team_key)"""
        try:
            before_count = self._count()
            unique = latest_per_player(rows(self.supabase.table(PLAYERS_TABLE).select("*").execute()))
            self.supabase.table(PLAYERS_TABLE).delete().neq("id", NIL_UUID).execute()
            if unique:
                self.supabase.table(PLAYERS_TABLE).insert(unique).execute()
            after_count = self._count()
        except Exception as e:
            logger.error(f"Error cleaning duplicate players: {e}")
            raise HTTPException(status_code=500, detail="Failed to clean duplicates")

        removed_count = before_count - after_count
        return {
            "success": True,
            "message": f"Database cleaned successfully. Removed {removed_count} duplicate records.",
            "before_count": before_count,
            "after_count": after_count,
            "removed_count": removed_count,
        }
