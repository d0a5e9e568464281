# Supabase table: email_templates
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

email_templates:
- id: uuid (primary key)
- name: text (unique, not null) - looked up by the notification service, e.g. 'ticket_confirmation'
- subject: text (not null) - may contain {{placeholder}} fields
- body_html: text (not null) - may contain {{placeholder}} fields
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
