"""
Database Models

Feature models live in their feature packages (see
noskrien.features.participants.models) and register with this Base.
"""

from noskrien.models.base import Base

__all__ = ["Base"]
