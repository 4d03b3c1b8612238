"""
NeuroTrade - online neural-network trading loop.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - trading: Per-symbol price-direction models, decisions, orders.

Layers:
    - domain: Entities, ports (ABCs), errors, feature encoding, decision rules.
    - application: Use cases, DTOs, model registry.
    - infrastructure: Adapters (torch network, model files, SQL store, Redis feed).
    - interfaces: Price feed schema, per-symbol dispatcher, subscriber.
    - shared: Cross-cutting concerns (logging).
"""

__version__ = "0.1.0"
