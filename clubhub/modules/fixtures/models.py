# Supabase table: fixtures_all_new
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

fixtures_all_new:
- id: uuid (primary key)
- fingerprint: text (unique) - upsert key, see scraper.fixtures_parser.make_fingerprint;
  manually created matches get a random uuid
- match_date: date
- match_time: text - e.g. '18:00'
- team1: text - home team
- team2: text - away team
- team1_score: integer (nullable)
- team2_score: integer (nullable)
- team1_logo: text (nullable)
- team2_logo: text (nullable)
- venue: text (nullable)
- league_key: text - e.g. 'a_lyga'
- status: text - 'upcoming' or 'completed'
- round: text (nullable) - e.g. 'Round 12'
- lff_url_slug: text - match page URL, '' when unknown
- statistics: text (nullable) - JSON {stat: {home, away}}
- events: text (nullable) - JSON [{minute, type, player, team, description}]
- is_draft: boolean (default: true) - listed among event drafts until used
- used_at: timestamp (nullable)
- owner_id: uuid (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
