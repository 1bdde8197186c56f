"""Application services.

Import from the defining module, e.g.:
    from warden.application.services.purge_service import PurgeService
"""
