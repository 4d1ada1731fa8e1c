"""Protocol data providers."""
