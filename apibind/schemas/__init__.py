"""Schemas — Pydantic models for exporting descriptor trees as documentation."""
