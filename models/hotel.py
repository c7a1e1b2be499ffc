"""
models/hotel.py
---------------
Domain model for hotels.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Hotel:
    """
    Represents a single hotel listing.

    Attributes:
        id: Database primary key (None until the hotel is created).
        title: Display name, the only required field.
        description: Optional free text.
        city: City the hotel is located in.
        rating: Star rating from 1 to 5.
        created_at: Timestamp when the record was created.
    """
    title: str
    description: Optional[str] = None
    city: Optional[str] = None
    rating: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def is_persisted(self) -> bool:
        """Returns True once the database has assigned an id."""
        return self.id is not None

    def __str__(self) -> str:
        stars = "⭐" * self.rating if self.rating else ""
        city = f" | {self.city}" if self.city else ""
        return f"#{self.id} {self.title}{city} {stars}".rstrip()
