"""Seed scripts for development databases."""
