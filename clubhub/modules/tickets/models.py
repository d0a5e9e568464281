# Supabase table: tickets
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

tickets:
- id: uuid (primary key)
- event_id: uuid (foreign key to events.id, not null)
- tier_id: uuid (foreign key to pricing_tiers.id, not null)
- purchaser_name: text (nullable)
- purchaser_surname: text (nullable)
- purchaser_email: text (nullable)
- status: text (default: 'valid') - 'valid' or 'validated'
- is_validated: boolean (default: false)
- validated_at: timestamp (nullable)
- qr_code_url: text (nullable) - PNG data URL of the signed QR payload
- pdf_url: text (nullable) - stored ticket PDF
- stripe_session_id: text (nullable) - checkout session that paid for the ticket
- owner_id: uuid (nullable)
- created_at: timestamp (default: now())
"""
