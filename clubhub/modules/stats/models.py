# Dashboard aggregates over the events and tickets tables; no table of its own.
