"""Developer and player tools for Frigate Hop."""
