"""
Pydantic schema definitions for API payloads.

Each domain (users, groups, mood, perceptions, justifications, alerts,
messages) defines its own models for request and response bodies.
Schemas are separated from the store layout to decouple the camelCase
API representation from the snake_case columns.
"""
