"""Persistence layer: models, database, entity registry, soft-delete gateway."""
