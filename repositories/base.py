"""
repositories/base.py
--------------------
Contract every hotel repository implements, plus the PII patterns the
title redaction uses so that all implementations mask the same text.
The patterns must stay valid in both Python `re` and PostgreSQL regexes.
"""

from abc import ABC, abstractmethod
from typing import ContextManager, Optional

from models.hotel import Hotel
from models.page import Page, PageRequest

EMAIL_PATTERN = r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"
# At least 7 digits, single separators allowed between them
PHONE_PATTERN = r"\+?[0-9](?:[ ()-]?[0-9]){6,}"
REDACTION_MARK = "[REDACTED]"


class HotelRepository(ABC):
    """Data access interface for hotels."""

    @abstractmethod
    def save(self, hotel: Hotel) -> Hotel:
        """
        Insert the hotel when it has no id, otherwise update its row.

        Raises:
            HotelNotFoundError: On update, if no row has the hotel's id.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, hotel_id: int) -> Optional[Hotel]:
        """Return the hotel with this id, or None."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, page_request: PageRequest) -> Page[Hotel]:
        """Return one page of all hotels ordered by id ascending."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, hotel_id: int) -> bool:
        """Delete the hotel; returns False when no row matched."""
        raise NotImplementedError

    @abstractmethod
    def redact_title(self, hotel_id: int) -> bool:
        """Mask PII in the hotel's title; returns False when no row matched."""
        raise NotImplementedError

    @abstractmethod
    def transaction(self) -> ContextManager:
        """Scope in which all writes commit together or not at all."""
        raise NotImplementedError
