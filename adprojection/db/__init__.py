"""Database and Redis connections."""
