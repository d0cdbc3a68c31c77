"""Infrastructure Layer: database connection lifecycle and logging setup.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Driver exceptions are mapped to core.errors before leaving this layer
"""
