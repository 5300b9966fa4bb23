"""Pydantic request/response schemas for the GymBaazi API."""
