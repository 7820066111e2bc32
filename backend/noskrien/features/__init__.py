"""
Feature modules for Noskrien race history.

Each feature is a self-contained module with:
- models.py - SQLAlchemy models or plain dataclasses
- schemas.py - Pydantic schemas (optional)
- service.py - Business logic
- repository.py - Data access (optional)
"""
