# Supabase table: coupon_codes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

coupon_codes:
- id: uuid (primary key)
- code: text (unique, stored upper-case)
- description: text (nullable)
- discount_type: text - 'percentage' or 'fixed'
- discount_value: numeric - percent in (0, 100] or an amount in EUR
- max_uses: integer (nullable) - no cap when null
- current_uses: integer (default: 0)
- min_order_amount: numeric (default: 0)
- valid_from: timestamp (default: now())
- valid_until: timestamp (nullable)
- is_active: boolean (default: true)
- created_by: uuid (foreign key to users.id)
- created_at: timestamp (default: now())
"""
