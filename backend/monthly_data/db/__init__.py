"""Database Package — declarative Base and standalone session factory."""
