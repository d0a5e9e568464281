"""Parsing of competition fixture pages into club match records (BeautifulSoup)."""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from clubhub.config.leagues import LFF_BASE_URL
from clubhub.scraper.standings_parser import background_url

logger = logging.getLogger(__name__)

FIXTURE_TABLE_SELECTOR = ".fixtures_table table, .matches_table table, .matches-table, table.matches-table"
MATCH_INFO_LINK_TEXT = "Rungtynių informacija"

DATE_RE = re.compile(r"(\d{4})\s+(\d{1,2})\s+(\d{1,2})")
SCORE_RES = [re.compile(r"(\d+)\s*-\s*(\d+)"), re.compile(r"(\d+)\s+(\d+)")]
ROUND_RE = re.compile(r"(\d+)\s*\.?\s*TURAS", re.IGNORECASE)


def make_fingerprint(league: str, home: str, away: str, match_date: str, match_time: str, index: int) -> str:
    raw = f"{league}_{home}_{away}_{match_date}_{match_time}_{index}".lower()
    raw = re.sub(r"\s+", "_", raw)
    return re.sub(r"[^a-z0-9_]", "", raw)


def parse_date(text: str) -> str:
    """'2025 5 17' -> '2025-05-17'; empty string when unparseable"""
    match = DATE_RE.search(text or "")
    if not match:
        return ""
    year, month, day = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d}"


def parse_score(text: str):
    cleaned = re.sub(r"\s+", " ", text or "").strip()
    if not cleaned or cleaned in ("- -", "-"):
        return None, None
    for pattern in SCORE_RES:
        match = pattern.search(cleaned)
        if match:
            return int(match.group(1)), int(match.group(2))
    return None, None


def extract_round(soup: BeautifulSoup) -> Optional[str]:
    heading = soup.select_one("h1, h2, .round-title")
    if heading is None:
        return None
    text = heading.get_text(strip=True)
    if not text:
        return None
    match = ROUND_RE.search(text)
    return f"Round {match.group(1)}" if match else text


def extract_team_logo(cell) -> Optional[str]:
    img = cell.find("img")
    if img is not None and img.get("src"):
        return img["src"]
    return background_url(cell.get("style"))


def extract_match_url(row) -> str:
    for link in row.find_all("a"):
        href = link.get("href")
        if href and MATCH_INFO_LINK_TEXT in link.get_text(strip=True):
            return href if href.startswith("http") else f"{LFF_BASE_URL}{href}"
    return ""


def parse_fixture_row(row, index: int, league: str, club: str, today: date,
                      round_info: Optional[str]) -> Optional[Dict[str, Any]]:
    """One fixture record, or None when the row is not a club match"""
    cells = row.find_all("td")
    if len(cells) < 5:
        return None
    home_name = cells[3].get_text(strip=True)
    away_name = cells[5].get_text(strip=True) if len(cells) > 5 else ""
    if club not in home_name.lower() and club not in away_name.lower():
        return None

    match_date = parse_date(cells[0].get_text(strip=True))
    match_time = cells[1].get_text(strip=True)
    home_score, away_score = parse_score(cells[4].get_text(" ", strip=True))
    status = "completed" if home_score is not None else "upcoming"
    if status == "upcoming" and match_date and date.fromisoformat(match_date) < today:
        status = "completed"

    return {
        "fingerprint": make_fingerprint(league, home_name, away_name, match_date, match_time, index),
        "date": match_date,
        "time": match_time,
        "home_team": {"name": home_name, "logo": extract_team_logo(cells[3])},
        "away_team": {"name": away_name, "logo": extract_team_logo(cells[5]) if len(cells) > 5 else None},
        "home_score": home_score,
        "away_score": away_score,
        "stadium": cells[2].get_text(strip=True),
        "league": league,
        "status": status,
        "round": round_info,
        "match_url": extract_match_url(row),
    }


def parse_fixtures(html: str, league: str, club_name: str, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Club matches from every fixtures table on the page; unreadable rows are skipped"""
    today = today or date.today()
    soup = BeautifulSoup(html, "html.parser")
    tables = soup.select(FIXTURE_TABLE_SELECTOR)
    if not tables:
        logger.warning("No fixtures tables found for %s", league)
        return []

    club = club_name.lower()
    round_info = extract_round(soup)
    fixtures = []
    for table in tables:
        for index, row in enumerate(table.select("tbody tr")):
            try:
                fixture = parse_fixture_row(row, index, league, club, today, round_info)
            except (ValueError, AttributeError) as e:
                logger.error("Error parsing fixture row %d for %s: %s", index, league, e)
                continue
            if fixture:
                fixtures.append(fixture)
    return fixtures
