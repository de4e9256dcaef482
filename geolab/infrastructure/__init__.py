"""Infrastructure layer: persistence, cache, security.

Implements application interfaces (ports).
"""
