from datetime import date

import pytest

from clubhub.config.leagues import LFF_BASE_URL
from clubhub.scraper.fixtures_parser import make_fingerprint, parse_date, parse_fixtures, parse_score
from clubhub.scraper.http_client import HttpError
from clubhub.scraper.lff_scraper import LFFScraper
from clubhub.scraper.match_parser import parse_match_events, parse_match_statistics
from clubhub.scraper.roster_parser import parse_roster
from clubhub.scraper.standings_parser import parse_goal_difference, parse_standings


def standings_row(position, name, gd, points):
    return (
        f"<tr><td>{position}</td>"
        f"<td><span class=\"league-table-club-img\" style=\"background: url('https://img.test/{name}.png')\"></span>"
        f"<span class=\"league-table-club-name\">{name}</span></td>"
        f"<td>10</td><td>6</td><td>2</td><td>2</td><td>18</td><td>9</td><td>{gd}</td><td>{points}</td></tr>"
    )


STANDINGS_HTML = (
    "<div class=\"league_table_border notactive\"><table><tbody>"
    + standings_row(1, "Senas", "+1", 1)
    + "</tbody></table></div>"
    "<div class=\"league_table_border\"><table><tbody>"
    + standings_row(1, "Banga", "+9", 20)
    + standings_row(2, "Žalgiris", "-3", 17)
    + "<tr><td>3</td><td>Trumpa eilutė</td></tr>"
    "</tbody></table></div>"
)

FIXTURES_HTML = (
    "<h1>5 TURAS</h1>"
    "<div class=\"fixtures_table\"><table><tbody>"
    "<tr><td>2025 5 17</td><td>18:00</td><td>Gargždų stadionas</td>"
    "<td><img src=\"https://img.test/banga.png\">Banga</td><td>2 - 1</td><td>Žalgiris</td>"
    "<td><a href=\"/rungtynes/123\">Rungtynių informacija</a></td></tr>"
    "<tr><td>2025 5 18</td><td>16:00</td><td>Kaunas</td><td>Kauno Žalgiris</td><td>0 - 0</td><td>Hegelmann</td></tr>"
    "<tr><td>2099 8 1</td><td>19:00</td><td>Vilnius</td><td>Žalgiris</td><td>- -</td><td>Banga</td></tr>"
    "<tr><td>2020 1 1</td><td>12:00</td><td>Vilnius</td><td>Riteriai</td><td></td><td>Banga</td></tr>"
    "</tbody></table></div>"
)

MATCH_HTML = (
    "<div id=\"stats_tab\">"
    "<div class=\"lff-match-timeline\">"
    "<div class=\"match-item\"><div class=\"match-event-item-left\">Jonas</div>"
    "<span class=\"event goal\"></span><div class=\"match-event-item-right\"></div></div>"
    "<div class=\"match-item\"><div class=\"match-event-item-left\"></div>"
    "<span class=\"event yellow_card\"></span><div class=\"match-event-item-right\">Petras</div></div>"
    "</div>"
    "<div class=\"possession-home\">55%</div><div class=\"possession-away\">45%</div>"
    "</div>"
)

ROSTER_HTML = (
    "<table><thead><tr><th>Nr.</th><th>Žaidėjas</th><th>Pozicija</th><th>Rungt.</th><th>Min</th>"
    "<th>Įv</th><th>Rp</th><th>G</th><th>R</th></tr></thead><tbody>"
    "<tr><td>9.</td><td><img src=\"https://img.test/jonas.png\">Jonas Jonaitis</td><td>Puolėjas</td>"
    "<td>10</td><td>812</td><td>5</td><td>2</td><td>1</td><td>0</td></tr>"
    "<tr><td>1.</td><td>Petras Petraitis</td><td>Vartininkas</td><td>12</td><td>1080</td>"
    "<td>(14)</td><td>0</td><td>0</td><td></td></tr>"
    "<tr><td>2.</td><td>Trumpa</td></tr>"
    "</tbody></table>"
    "<table><thead><tr><th>Naujienos</th></tr></thead><tbody>"
    "<tr><td>a</td><td>b</td><td>c</td><td>d</td><td>e</td></tr></tbody></table>"
)


def test_parse_standings_reads_active_table():
    standings = parse_standings(STANDINGS_HTML, "Banga A")

    assert [team["team"]["name"] for team in standings] == ["Banga", "Žalgiris"]
    banga = standings[0]
    assert banga["team"]["logo"] == "https://img.test/Banga.png"
    assert banga["played"] == 10
    assert banga["goalsFor"] == 18
    assert banga["goalDifference"] == 9
    assert banga["points"] == 20
    assert banga["league"] == "Banga A"
    assert standings[1]["goalDifference"] == -3


def test_parse_standings_without_table():
    assert parse_standings("<p>Puslapis nerastas</p>", "Banga A") == []


@pytest.mark.parametrize("text, expected", [("+5", 5), ("-4", -4), ("0", 0), ("", 0)])
def test_parse_goal_difference(text, expected):
    assert parse_goal_difference(text) == expected


def test_parse_fixtures_keeps_club_matches():
    fixtures = parse_fixtures(FIXTURES_HTML, "A lyga", "Banga", today=date(2026, 1, 1))

    assert len(fixtures) == 3
    played, upcoming, unplayed = fixtures
    assert played["date"] == "2025-05-17"
    assert played["home_team"] == {"name": "Banga", "logo": "https://img.test/banga.png"}
    assert (played["home_score"], played["away_score"]) == (2, 1)
    assert played["status"] == "completed"
    assert played["round"] == "Round 5"
    assert played["match_url"] == f"{LFF_BASE_URL}/rungtynes/123"
    assert upcoming["status"] == "upcoming"
    assert upcoming["home_score"] is None
    assert unplayed["status"] == "completed"


def test_fingerprint_is_stable_and_ascii():
    fingerprint = make_fingerprint("A lyga", "Banga", "Žalgiris", "2025-05-17", "18:00", 0)

    assert fingerprint == "a_lyga_banga_algiris_20250517_1800_0"
    assert fingerprint == make_fingerprint("A lyga", "Banga", "Žalgiris", "2025-05-17", "18:00", 0)


def test_parse_date_and_score():
    assert parse_date("2025 5 7") == "2025-05-07"
    assert parse_date("rytoj") == ""
    assert parse_score("3 - 0") == (3, 0)
    assert parse_score("1 2") == (1, 2)
    assert parse_score("- -") == (None, None)


def test_parse_match_statistics():
    statistics = parse_match_statistics(MATCH_HTML)

    assert statistics == {
        "goals": {"home": 1, "away": 0},
        "yellow_cards": {"home": 0, "away": 1},
        "possession": {"home": 55, "away": 45},
    }


def test_match_without_statistics():
    assert parse_match_statistics("<p>Nėra duomenų</p>") is None


def test_parse_match_events_sorted_and_deduplicated():
    html = (
        "<div class=\"lff-tab-content\" data-tab=\"3\">"
        "<p>Petras Petraitis 67'</p><p>Jonas Jonaitis 23'</p><p>Jonas Jonaitis 23'</p>"
        "<p>Statistika 5'</p><p>Vėlyvas Žaidėjas 130'</p>"
        "</div>"
    )

    events = parse_match_events(html)

    assert [(e["minute"], e["player"]) for e in events] == [(23, "Jonas Jonaitis"), (67, "Petras Petraitis")]
    assert events[0]["type"] == "other"


def test_parse_roster():
    players = parse_roster(ROSTER_HTML, "BANGA A")

    assert [p["name"] for p in players] == ["Jonas Jonaitis", "Petras Petraitis"]
    striker, keeper = players
    assert striker["number"] == "9"
    assert striker["minutes"] == 812
    assert striker["goals"] == 5
    assert striker["image_url"] == "https://img.test/jonas.png"
    assert striker["team_key"] == "BANGA A"
    assert keeper["goals"] == 14
    assert keeper["red_cards"] is None


LEAGUE = {
    "name": "Banga A",
    "league_key": "a_lyga",
    "team_key": "BANGA A",
    "standings_url": "https://lff.test/standings",
    "fixtures_url": "https://lff.test/fixtures",
    "players_url": "https://lff.test/players",
}
BROKEN_LEAGUE = {**LEAGUE, "name": "Banga B", "league_key": "ii_lyga",
                 "standings_url": "https://lff.test/broken", "fixtures_url": "https://lff.test/broken"}


def page_fetcher(pages):
    def fetch(url):
        if url not in pages:
            raise HttpError(f"Failed to fetch {url}")
        return pages[url]
    return fetch


def test_scrape_all_standings_skips_broken_league():
    scraper = LFFScraper(
        fetcher=page_fetcher({LEAGUE["standings_url"]: STANDINGS_HTML}),
        leagues=[LEAGUE, BROKEN_LEAGUE],
        delay_seconds=0,
    )

    results = scraper.scrape_all_standings()

    assert len(results) == 1
    assert results[0]["league"] is LEAGUE
    assert len(results[0]["standings"]) == 2


def test_scrape_all_fixtures_enriches_completed_matches():
    scraper = LFFScraper(
        fetcher=page_fetcher({
            LEAGUE["fixtures_url"]: FIXTURES_HTML,
            f"{LFF_BASE_URL}/rungtynes/123": MATCH_HTML,
        }),
        leagues=[LEAGUE, BROKEN_LEAGUE],
        delay_seconds=0,
    )

    results = scraper.scrape_all_fixtures(with_statistics=True)

    assert len(results) == 1
    fixtures = results[0]["fixtures"]
    assert fixtures[0]["statistics"]["goals"] == {"home": 1, "away": 0}
    assert "statistics" not in fixtures[1]


BAD_DATE_FIXTURES_HTML = (
    "<div class=\"fixtures_table\"><table><tbody>"
    "<tr><td>2025 2 30</td><td>18:00</td><td>Gargždai</td><td>Banga</td><td>- -</td><td>Sūduva</td></tr>"
    "<tr><td>2099 3 1</td><td>15:00</td><td>Vilnius</td><td>Žalgiris</td><td>- -</td><td>Banga</td></tr>"
    "</tbody></table></div>"
)


def test_parse_fixtures_skips_unreadable_row():
    fixtures = parse_fixtures(BAD_DATE_FIXTURES_HTML, "A lyga", "Banga", today=date(2026, 1, 1))

    assert len(fixtures) == 1
    assert fixtures[0]["date"] == "2099-03-01"
    assert fixtures[0]["status"] == "upcoming"


def test_scrape_all_fixtures_survives_unreadable_row():
    scraper = LFFScraper(
        fetcher=page_fetcher({LEAGUE["fixtures_url"]: BAD_DATE_FIXTURES_HTML}),
        leagues=[LEAGUE],
        delay_seconds=0,
    )

    results = scraper.scrape_all_fixtures(with_statistics=True)

    assert len(results) == 1
    assert [f["away_team"]["name"] for f in results[0]["fixtures"]] == ["Banga"]
