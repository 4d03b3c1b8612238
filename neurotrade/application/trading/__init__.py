"""
Trading bounded context - application layer.
"""
