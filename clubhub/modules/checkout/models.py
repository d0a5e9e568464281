# No tables of its own. Checkout sessions live at Stripe; the metadata keys
# written here are read back by the Stripe webhook (see webhooks/service.py):
#
# ticket purchase (mode 'payment'):
#   eventId, tierId, quantity, purchaserName, purchaserSurname, purchaserEmail
# shop purchase (mode 'payment'):
#   purchaseType='shop', purchaserName, purchaserEmail, purchaserPhone,
#   deliveryAddress (JSON), couponId, cart (JSON list of {id, variantId, name, price, quantity, color})
# season pass (mode 'subscription'):
#   subscriptionTypeId
