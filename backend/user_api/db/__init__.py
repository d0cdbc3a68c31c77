"""Database Metadata: SQLAlchemy declarative base shared by all tables."""
