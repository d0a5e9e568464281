# Supabase tables: events, pricing_tiers, event_drafts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

events:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- date: date (nullable)
- time: text (nullable) - e.g. '18:00'
- location: text (nullable)
- team1_id: uuid (foreign key to teams.id, nullable)
- team2_id: uuid (foreign key to teams.id, nullable)
- cover_image_url: text (nullable)
- owner_id: uuid (foreign key to users.id, nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

pricing_tiers:
- id: uuid (primary key)
- event_id: uuid (foreign key to events.id, not null)
- name: text (not null)
- price: numeric (not null)
- quantity: integer (not null) - capacity of the tier
- sold_quantity: integer (default: 0)
- created_at: timestamp (default: now())

event_drafts:
- id: uuid (primary key)
- title: text
- date: date
- time: text
- team1_name: text
- team2_name: text
- location: text
- created_at: timestamp (default: now())

Fixture drafts (fixtures_all_new.is_draft = true) are listed alongside event_drafts.
"""
