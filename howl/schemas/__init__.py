# Schemas package init
"""
Howl Backend — API Response Schemas
=====================================

Pydantic models describing what the API returns. Request bodies are plain
JSON validated against the record schemas in `howl.validation`.
"""
