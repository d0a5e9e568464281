"""Scrapers for the football association site: standings, fixtures, match pages and rosters."""
