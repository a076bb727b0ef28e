"""
Pydantic schema definitions for API payloads.

Each entity (clients, items, orders, reviews) defines a ``*Create``
model for request bodies and a ``*Read`` model that is both the API
response shape and the record persisted in the entity store.
"""
