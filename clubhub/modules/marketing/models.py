# Supabase table: marketing_campaigns
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

marketing_campaigns:
- id: uuid (primary key)
- subject: text (not null)
- body_html: text (nullable)
- body_text: text (nullable)
- recipient_count: integer
- owner_id: uuid - admin who sent the campaign
- created_at: timestamp (default: now())
"""
