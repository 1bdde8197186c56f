"""Warden: soft-delete lifecycle and session trust core.

Layers:
    core            settings, result types, errors, composition root
    domain          entities, enums, errors, protocol ports
    application     token authority, auth flows, purge and token reaping
    infrastructure  SQLAlchemy persistence, Redis cache, JWT, bcrypt, jobs
"""

__version__ = "0.1.0"
