"""Core Layer: error hierarchy and domain types shared by every other layer.

Invariants:
    - core/ never imports from api/, infrastructure/ or services/
"""
