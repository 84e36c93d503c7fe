"""Database-backed ContactRepository adapters."""
