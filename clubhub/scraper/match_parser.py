"""Parsing of single match pages: statistics counts and timeline events."""

import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

TIMELINE_EVENT_TYPES = ["goal", "yellow_card", "red_card", "substitution"]
TIMELINE_STAT_KEYS = {
    "goal": "goals",
    "yellow_card": "yellow_cards",
    "red_card": "red_cards",
    "substitution": "substitutions",
}

# Stat name -> class substrings used on the stats tab (English and Lithuanian markup)
KEYWORD_STATS = {
    "possession": ["possession", "valdymas", "valdymo"],
    "shots": ["shot", "smūgis", "smūgių"],
    "shots_on_target": ["target", "įvartis", "įvartių"],
    "corners": ["corner", "kampinis"],
    "fouls": ["foul", "pažeidimas"],
    "yellow_cards": ["yellow", "geltona"],
    "red_cards": ["red", "raudona"],
    "offsides": ["offside", "ofsaid"],
}

STATS_TAB_SELECTOR = '[data-tab="3"], [data-tabname="stats_tab"], #stats_tab, .stats_tab, [data-tab="stats"]'

_UPPER = "A-ZĄČĘĖĮŠŲŪŽ"
_LOWER = "a-ząčęėįšųūž"
_NAME = rf"[{_UPPER}][{_LOWER}\s]+(?:\s+[{_UPPER}][{_LOWER}\s]+)*"
PLAYER_MINUTE_RE = re.compile(rf"({_NAME})\s+(\d+)'")
MINUTE_PLAYER_RE = re.compile(rf"(\d+)'min\s+({_NAME})")

SKIP_WORDS = ["statistika", "naujienos", "veteranų", "pilna", "fk banga", "dfk dainava", "topsport", "lyga"]


def _first_number(text: Optional[str]) -> Optional[int]:
    match = re.search(r"(\d+)", text or "")
    return int(match.group(1)) if match else None


def _side_has_text(item, class_name: str) -> bool:
    side = item.select_one(f".{class_name}")
    return side is not None and side.get_text(strip=True) != ""


def parse_match_statistics(html: str) -> Optional[Dict[str, Dict[str, int]]]:
    """Home/away counts; None when the page carries no statistics"""
    soup = BeautifulSoup(html, "html.parser")
    container = soup.select_one(STATS_TAB_SELECTOR) or soup
    statistics: Dict[str, Dict[str, int]] = {}

    timeline = container.select_one(".lff-match-timeline")
    if timeline is not None:
        counts = {event_type: {"home": 0, "away": 0} for event_type in TIMELINE_EVENT_TYPES}
        for item in timeline.select(".match-item"):
            event_el = item.select_one(".event")
            classes = " ".join(event_el.get("class", [])) if event_el is not None else ""
            event_type = next((t for t in TIMELINE_EVENT_TYPES if t in classes), None)
            if event_type is None:
                continue
            if _side_has_text(item, "match-event-item-right"):
                counts[event_type]["away"] += 1
            elif _side_has_text(item, "match-event-item-left"):
                counts[event_type]["home"] += 1
        for event_type, pair in counts.items():
            if pair["home"] or pair["away"]:
                statistics[TIMELINE_STAT_KEYS[event_type]] = pair

    for stat, keywords in KEYWORD_STATS.items():
        if stat in statistics:
            continue
        selector = ", ".join(f'[class*="{keyword}"]' for keyword in keywords)
        elements = container.select(selector)
        if len(elements) < 2:
            continue
        home = _first_number(elements[0].get_text())
        away = _first_number(elements[1].get_text())
        if home is not None and away is not None:
            statistics[stat] = {"home": home, "away": away}

    return statistics or None


def parse_match_events(html: str) -> Optional[List[Dict[str, Any]]]:
    """Player/minute pairs from the match progress tab, sorted by minute"""
    soup = BeautifulSoup(html, "html.parser")
    progress = soup.select_one('.lff-tab-content[data-tab="3"]')
    source = progress if progress is not None else (soup.body or soup)
    text = source.get_text()

    candidates = []
    for match in PLAYER_MINUTE_RE.finditer(text):
        candidates.append((match.group(1).strip(), int(match.group(2)), match.group(0)))
    for match in MINUTE_PLAYER_RE.finditer(text):
        candidates.append((match.group(2).strip(), int(match.group(1)), match.group(0)))

    events = []
    seen = set()
    for player, minute, description in candidates:
        if minute < 1 or minute > 120 or len(player) < 2:
            continue
        lowered = player.lower()
        if any(word in lowered for word in SKIP_WORDS):
            continue
        key = (minute, player)
        if key in seen:
            continue
        seen.add(key)
        events.append({
            "minute": minute,
            "type": "other",
            "player": player,
            "team": "home",
            "description": description,
        })

    events.sort(key=lambda e: e["minute"])
    return events or None
