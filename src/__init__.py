"""Game database index generator."""
