"""
Application package.

``core`` holds configuration, persistence, validation and security;
``schemas`` the pydantic models; ``services`` the business logic; and
``api`` the versioned HTTP routers assembled in ``main``.
"""
