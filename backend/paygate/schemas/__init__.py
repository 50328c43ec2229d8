"""Schemas — Pydantic models for the HTTP boundary (camelCase on the wire)."""
