"""Service Layer: one parameterized statement per operation, no HTTP concerns."""
