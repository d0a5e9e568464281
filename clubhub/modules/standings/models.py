# Supabase table: standings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

standings:
- id: uuid (primary key)
- league_key: text (unique) - upsert key, e.g. 'a_lyga'
- league_name: text - display name, e.g. 'Banga A'
- standings_data: jsonb - list of table rows as produced by scraper.standings_parser
- last_updated: timestamp
"""
