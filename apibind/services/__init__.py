"""Services Layer — registry, operator chain driver and standard converters.

Invariants:
    - Services depend on core/, never the reverse
"""
