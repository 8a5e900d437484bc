"""Domain layer - entities and interfaces."""
