# Supabase tables: shop_orders, shop_order_items
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

shop_orders:
- id: uuid (primary key)
- order_number: text (unique) - e.g. 'ORD-20250517-3F9A1C'
- customer_name: text (not null)
- customer_email: text (not null)
- customer_phone: text (nullable)
- delivery_address: jsonb - {street, city, postalCode, country}
- subtotal: numeric
- discount_amount: numeric (default: 0)
- total_amount: numeric
- coupon_code: text (nullable)
- coupon_discount: numeric (nullable)
- status: text (default: 'pending') - pending, paid, processing, shipped, delivered, cancelled
- tracking_number: text (nullable)
- notes: text (nullable)
- stripe_session_id: text (nullable)
- created_by: text (nullable) - user id, or 'stripe' for webhook orders
- shipped_at: timestamp (nullable)
- delivered_at: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

shop_order_items:
- id: uuid (primary key)
- order_id: uuid (foreign key to shop_orders.id)
- product_id: text (nullable)
- variant_id: text (nullable)
- product_name: text
- product_sku: text (nullable)
- variant_attributes: jsonb (nullable)
- quantity: integer
- unit_price: numeric
- total_price: numeric
"""
