"""Game session backend package."""
