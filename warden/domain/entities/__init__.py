"""Domain entities.

Usage:
    from warden.domain.entities import User, StoredFile, SessionDescriptor
"""

from warden.domain.entities.session_descriptor import SessionDescriptor
from warden.domain.entities.stored_file import StoredFile
from warden.domain.entities.user import User

__all__ = ["SessionDescriptor", "StoredFile", "User"]
