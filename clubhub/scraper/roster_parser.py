"""Parsing of team roster tables into player rows."""

import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

ROSTER_HEADER_WORDS = ["žaidėjas", "pozicija", "min", "įv", "rp"]


def _number(text: str) -> Optional[int]:
    text = text.strip()
    return int(text) if text.isdigit() else None


def _goals(text: str) -> Optional[int]:
    # Goalkeepers show conceded goals in parentheses, e.g. "(27)"
    match = re.search(r"\((\d+)\)", text)
    if match:
        return int(match.group(1))
    return _number(text)


def parse_roster(html: str, team_key: str) -> List[Dict[str, Any]]:
    soup = BeautifulSoup(html, "html.parser")
    players = []
    for table in soup.find_all("table"):
        header = " ".join(th.get_text(strip=True).lower() for th in table.select("thead tr th, tr th"))
        if not any(word in header for word in ROSTER_HEADER_WORDS):
            continue
        for row in table.select("tbody tr"):
            cells = [td.get_text(strip=True) for td in row.find_all("td")]
            if len(cells) < 5:
                continue
            cells += [""] * (9 - len(cells))
            name = cells[1]
            if len(name) <= 1:
                continue
            number_match = re.search(r"(\d+)\.", cells[0])
            img = row.find("img")
            players.append({
                "name": name,
                "number": number_match.group(1) if number_match else None,
                "position": cells[2] or None,
                "matches": _number(cells[3]),
                "minutes": _number(cells[4]),
                "goals": _goals(cells[5]),
                "assists": _number(cells[6]),
                "yellow_cards": _number(cells[7]),
                "red_cards": _number(cells[8]),
                "team_key": team_key,
                "image_url": img.get("src") if img is not None else None,
            })
    return players
