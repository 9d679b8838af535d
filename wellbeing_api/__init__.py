"""
Top-level package for the Wellbeing API.

All functionality lives in submodules under ``app``; run the service
with ``uvicorn wellbeing_api.app.main:app`` or ``python run.py``.
"""

__all__ = []
