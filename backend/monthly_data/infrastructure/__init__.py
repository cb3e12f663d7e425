"""Infrastructure Layer — database access, token handling and logging setup."""
