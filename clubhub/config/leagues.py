"""
League and Team Source Configuration
Defines the leagues the club plays in and the pages the scrapers read from.
Used by the fixtures, standings and players modules and by the scrape script.
"""

LFF_BASE_URL = "https://www.lff.lt"

# One entry per club team; league_key is the upsert key for standings
LEAGUES = [
    {
        "name": "Banga A",
        "league_key": "a_lyga",
        "team_key": "BANGA A",
        "standings_url": f"{LFF_BASE_URL}/lygos/a-lyga/",
        "fixtures_url": f"{LFF_BASE_URL}/varzybos/a-lyga-20647154/",
        "players_url": "https://www.alyga.lt/komanda/banga",
    },
    {
        "name": "Banga B",
        "league_key": "ii_lyga_a",
        "team_key": "BANGA B",
        "standings_url": f"{LFF_BASE_URL}/lygos/ii-lyga-a-divizionas-2025/",
        "fixtures_url": f"{LFF_BASE_URL}/varzybos/ii-lyga-a-divizionas-2025-20708568/",
        "players_url": "https://lietuvosfutbolas.lt/klubai/fk-banga-b-12577/",
    },
    {
        "name": "Banga M",
        "league_key": "moteru_a_lyga",
        "team_key": "BANGA M",
        "standings_url": f"{LFF_BASE_URL}/lygos/2025-m-moter-a-lyga/",
        "fixtures_url": f"{LFF_BASE_URL}/varzybos/2025-m-moter-a-lyga-20732722/",
        "players_url": "https://lietuvosfutbolas.lt/klubai/fk-banga-12512/",
    },
]

TEAM_KEYS = [league["team_key"] for league in LEAGUES]


def get_league_key(league_name: str) -> str:
    """Map a league display name to its key; unknown names are slugified"""
    for league in LEAGUES:
        if league["name"] == league_name:
            return league["league_key"]
    return league_name.lower().replace(" ", "_")
