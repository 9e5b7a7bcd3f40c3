"""Round handler for a two-button color matching voice game."""
