# No tables of its own: reads tickets, events, pricing_tiers and subscriptions
# and marks tickets validated (see tickets/models.py, subscriptions/models.py)
