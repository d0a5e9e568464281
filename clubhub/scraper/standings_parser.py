"""Parsing of league table pages into standings rows (BeautifulSoup)."""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

BACKGROUND_URL_RE = re.compile(r"background:\s*url\(([^)]+)\)")


def _int(text: Optional[str]) -> int:
    match = re.search(r"-?\d+", text or "")
    return int(match.group(0)) if match else 0


def background_url(style: Optional[str]) -> Optional[str]:
    if not style:
        return None
    match = BACKGROUND_URL_RE.search(style)
    return match.group(1).strip("'\"") if match else None


def parse_goal_difference(text: str) -> int:
    text = (text or "").strip()
    value = _int(text.replace("+", "").replace("-", ""))
    return -value if text.startswith("-") else value


def parse_standings(html: str, league: str) -> List[Dict[str, Any]]:
    """Rows of the active table; needs at least ten cells per row"""
    soup = BeautifulSoup(html, "html.parser")
    table = soup.select_one(".league_table_border:not(.notactive) table")
    if table is None:
        logger.warning("No active standings table found for %s", league)
        return []

    now = datetime.now(timezone.utc).isoformat()
    standings = []
    for index, row in enumerate(table.select("tbody tr")):
        cells = row.find_all("td")
        if len(cells) < 10:
            continue
        team_cell = cells[1]
        name_el = team_cell.select_one(".league-table-club-name")
        logo_el = team_cell.select_one(".league-table-club-img")
        standings.append({
            "position": _int(cells[0].get_text(strip=True)),
            "team": {
                "name": name_el.get_text(strip=True) if name_el else f"Team {index + 1}",
                "logo": background_url(logo_el.get("style")) if logo_el else None,
            },
            "played": _int(cells[2].get_text(strip=True)),
            "won": _int(cells[3].get_text(strip=True)),
            "drawn": _int(cells[4].get_text(strip=True)),
            "lost": _int(cells[5].get_text(strip=True)),
            "goalsFor": _int(cells[6].get_text(strip=True)),
            "goalsAgainst": _int(cells[7].get_text(strip=True)),
            "goalDifference": parse_goal_difference(cells[8].get_text(strip=True)),
            "points": _int(cells[9].get_text(strip=True)),
            "league": league,
            "lastUpdated": now,
        })
    return standings
