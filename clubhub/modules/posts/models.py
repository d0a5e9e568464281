# Supabase table: banga_posts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

banga_posts:
- id: text (primary key) - generated by the app when not supplied
- title: text (not null)
- content: text (not null)
- url: text (unique, not null) - link to the original article
- published_date: timestamp (nullable)
- image_url: text (nullable)
- excerpt: text (nullable)
- source: text (nullable)
- category: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
