"""Domain layer - entities, relations and validation."""
