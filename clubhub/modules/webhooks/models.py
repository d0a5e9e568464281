# No tables of its own. Stripe events are turned into rows in
# tickets, shop_orders/shop_order_items and subscriptions.
