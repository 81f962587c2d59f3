"""Configuration package - Settings and logging setup."""
