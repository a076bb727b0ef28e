"""
Service layer.

Each service groups the operations of one entity as classmethods that
receive the ``AppState`` explicitly.  Services raise the typed errors
from ``core.errors``; translating them to HTTP responses is left to
the application.
"""
