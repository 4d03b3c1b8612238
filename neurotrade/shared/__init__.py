"""
Shared cross-cutting concerns (logging).
"""
