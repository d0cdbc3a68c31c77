"""ORM Models: one module per persisted table.

Invariants:
    - Every model inherits from db.base.Base
"""
