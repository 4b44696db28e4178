"""Domain layer: entities and infrastructure contracts."""
