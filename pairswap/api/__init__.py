"""HTTP surface for the pool engine."""
