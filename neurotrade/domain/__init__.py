"""
Domain layer package.

Contains pure business logic: entities, feature encoding, decision rules,
and port interfaces. No framework imports, no IO, no side effects.
"""
