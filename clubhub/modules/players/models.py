# Supabase table: banga_playerss
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

banga_playerss:
- id: uuid (primary key)
- name: text (not null)
- surname: text (nullable)
- number: text (nullable) - shirt number
- position: text (nullable)
- matches, minutes, goals, assists, yellow_cards, red_cards: integer (nullable)
- team_key: text - 'BANGA A' | 'BANGA B' | 'BANGA M'
- profile_url: text (nullable)
- image_url: text (nullable)
- inserted_at: timestamp

Unique constraint on (name, team_key); scraping upserts on it.
"""
