"""
Infrastructure adapters for the trading bounded context.

Each adapter implements a domain port (ABC) and connects
to an external system: filesystem, database, message broker.
"""
