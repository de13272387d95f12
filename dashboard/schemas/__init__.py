"""
Pydantic schemas for form validation and API responses.

All FastAPI endpoints MUST use explicit Pydantic models for their bodies.
"""
