"""Application layer: services orchestrating domain ports.

Imports only from ``warden.core`` and ``warden.domain``; infrastructure is
injected through protocols by the container.
"""
