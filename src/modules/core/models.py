"""Base abstract model shared by the webstore entities.

Provides ``BaseModel``: a UUIDv7 primary key stored as text plus
``created_at`` / ``updated_at`` timestamps.

The models only describe the schema.  Rows are read and written by the SQL
repositories, so identifiers are generated in Python (``new_id``) and the
timestamps are supplied explicitly by each INSERT/UPDATE statement.
"""

from __future__ import annotations

import uuid6
from django.db import models

# Largest value a PositiveIntegerField quantity column holds on every backend.
MAX_QUANTITY = 2_147_483_647


def new_id() -> str:
    """Return a fresh, time-ordered identifier (UUIDv7, canonical text form)."""
    return str(uuid6.uuid7())


class BaseModel(models.Model):
    """Abstract base with a text UUIDv7 PK and timestamp bookkeeping."""

    id = models.CharField(
        primary_key=True,
        max_length=36,
        default=new_id,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
