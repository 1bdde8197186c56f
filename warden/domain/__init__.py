"""Domain layer: entities, enums, errors and protocol ports."""
