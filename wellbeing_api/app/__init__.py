"""
Application package initializer.

The app is organised by layer: ``core`` (configuration, logging,
store access, errors), ``schemas`` (request/response models),
``services`` (business rules per domain) and ``api`` (versioned
routers).
"""

from .main import app  # noqa: F401
