"""
security - Identity contracts shared across the application.
"""

from security.identity import SecurityIdentity   # noqa: F401
