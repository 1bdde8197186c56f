"""Repository implementations (adapters for the domain protocols).

Import from the defining module:
    from warden.infrastructure.persistence.repositories.user_repository import (
        UserRepository,
    )
"""
