# Supabase table: subscription_types
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

subscription_types:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- price: numeric (not null)
- duration_days: integer (not null) - also the Stripe billing interval in days
- features: jsonb (list of strings, default: [])
- is_active: boolean (default: true)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
