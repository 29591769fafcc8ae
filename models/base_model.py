#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixin for the Book Catalog API.

- UUID primary key (String(36)) generated on construction
- created_at / updated_at timestamps set by the database
- keyword construction with required-field checks (``__required__``)

Notes:
- We use server-side defaults (func.now()) so timestamps are set consistently by the DB.
- For SQLite, func.now() maps to CURRENT_TIMESTAMP.
- Sessions and commits are owned by the service layer, not by the models.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Declarative base for all models
Base = declarative_base()


def _uuid_str() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


class BaseModel:
    """
    Base mixin for all persistent models.

    Subclasses list the attributes that must be supplied at construction time
    in ``__required__``; a missing or blank value raises ValueError before the
    object ever reaches a session.
    """

    __required__: tuple = ()

    id = Column(String(36), primary_key=True, default=_uuid_str, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __init__(self, *args, **kwargs):
        missing = [
            name for name in self.__required__
            if kwargs.get(name) is None or (isinstance(kwargs[name], str) and not kwargs[name].strip())
        ]
        if missing:
            raise ValueError(f"{self.__class__.__name__} requires: {', '.join(missing)}")
        for key, value in kwargs.items():
            setattr(self, key, value)
        # Ensure an id exists if caller passed none
        if getattr(self, "id", None) is None:
            self.id = _uuid_str()

    def __str__(self) -> str:
        """Human-friendly representation including id and fields."""
        return f"[{self.__class__.__name__}] ({self.id}) {self.__dict__}"
