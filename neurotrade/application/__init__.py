"""
Application layer package.

Use cases orchestrating domain services and ports:
bootstrap, per-tick online learning, decision execution.
"""
