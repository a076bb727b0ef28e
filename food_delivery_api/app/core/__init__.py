"""Configuration, persistence, validation and security primitives."""
