# Supabase table: teams
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

teams:
- id: uuid (primary key)
- team_name: text (not null)
- logo: text (nullable) - public URL, usually from the team-logo bucket
- created_at: timestamp (default: now())
"""
