# Supabase table: subscriptions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

subscriptions:
- id: uuid (primary key)
- subscription_type_id: uuid (foreign key to subscription_types.id, nullable)
- purchaser_name: text (nullable)
- purchaser_surname: text (nullable)
- purchaser_email: text (nullable)
- valid_from: timestamp (not null)
- valid_to: timestamp (not null)
- qr_code_url: text (nullable) - PNG data URL of the signed QR payload
- owner_id: text (nullable) - user id, purchaser email for Stripe purchases or 'system'
- stripe_subscription_id: text (nullable)
- subscription_status: text (nullable) - mirrors the Stripe subscription status
- created_at: timestamp (default: now())
"""
