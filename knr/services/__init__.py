"""Service layer for knr."""
