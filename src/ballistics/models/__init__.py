"""Pydantic v2 entity models built from declarative records.

Re-exports all model classes for convenient import::

    from ballistics.models import Projectile
"""

from .projectile import Projectile

__all__ = [
    "Projectile",
]
