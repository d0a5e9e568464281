# Supabase Auth plus the application tables: users, corporations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Supabase Auth handles registration, login and JWT validation (auth.users).

Expected Supabase table structure:

users:
- id: uuid (primary key, same as auth.users.id)
- email: text
- role: text (nullable) - 'admin' grants dashboard access
- corporation_id: uuid (foreign key to corporations.id, nullable)
- created_at: timestamp (default: now())

corporations:
- id: uuid (primary key)
- name: text (not null)
- owner_id: uuid (foreign key to users.id, not null)
- created_at: timestamp (default: now())
"""
