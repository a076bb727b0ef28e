"""
Top-level package for the Food Delivery API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``food_delivery_api.app.main:app``.
"""

__all__ = []
