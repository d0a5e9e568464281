# Fans have no table of their own: they are aggregated from tickets and
# subscriptions by purchaser email.
