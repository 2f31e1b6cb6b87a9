"""
Pydantic schema definitions for API payloads.

Each domain (content, sections, reviews, returns) defines its own
models for request and response bodies.
"""
