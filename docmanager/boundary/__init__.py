"""Boundary adapters: relational persistence and blob storage."""
