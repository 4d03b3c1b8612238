"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: the torch network, model snapshot
files, the SQL price/order/audit store, and the Redis price feed.
"""
