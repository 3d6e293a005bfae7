"""Image and persistence services for tilesets."""
