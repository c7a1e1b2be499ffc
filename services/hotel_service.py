"""
services/hotel_service.py
-------------------------
Business logic for managing hotels.
A thin layer over HotelRepository that adds transaction scoping for
updates and one metric on oversized listing requests.
"""

from typing import Optional

from config import LARGE_PAYLOAD_THRESHOLD, REDACT_ON_UPDATE
from models.hotel import Hotel
from models.page import Page, PageRequest
from repositories.base import HotelRepository
from utils.exceptions import HotelNotFoundError
from utils.logger import get_logger
from utils.metrics import MetricsSink

logger = get_logger(__name__)

LARGE_PAYLOAD_COUNTER = "hotel_service.get_all.large_payload"


class HotelService:
    """
    Entry point used by the bot handlers for everything hotel related.

    Collaborators are passed in explicitly:
        repository: Any HotelRepository implementation.
        metrics: Any MetricsSink; failures to increment are logged, not raised.
        large_payload_threshold: Page sizes above this are counted.
        redact_on_update: Also mask PII in the title on every update.
    """

    def __init__(
        self,
        repository: HotelRepository,
        metrics: MetricsSink,
        large_payload_threshold: int = LARGE_PAYLOAD_THRESHOLD,
        redact_on_update: bool = REDACT_ON_UPDATE,
    ):
        self.repo = repository
        self.metrics = metrics
        self.large_payload_threshold = large_payload_threshold
        self.redact_on_update = redact_on_update

    def create_hotel(self, hotel: Hotel) -> Hotel:
        """
        Persist a new hotel.

        Returns:
            The stored Hotel with its assigned id.

        Raises:
            ValueError: If the hotel already carries an id.
        """
        if hotel.is_persisted():
            raise ValueError(f"New hotel must not have an id (got {hotel.id})")
        saved = self.repo.save(hotel)
        logger.info(f"Created hotel #{saved.id} '{saved.title}'")
        return saved

    def get_hotel(self, hotel_id: int) -> Optional[Hotel]:
        """Return the hotel, or None if no hotel has this id."""
        return self.repo.find_by_id(hotel_id)

    def update_hotel(self, hotel: Hotel) -> None:
        """
        Overwrite an existing hotel inside a single transaction.

        Raises:
            ValueError: If the hotel has no id.
            HotelNotFoundError: If no hotel has this id. Nothing is written.
        """
        if not hotel.is_persisted():
            raise ValueError("Hotel to update must have an id")
        with self.repo.transaction():
            self.repo.save(hotel)
            if self.redact_on_update:
                self.repo.redact_title(hotel.id)
        logger.info(f"Updated hotel #{hotel.id}")

    def delete_hotel(self, hotel_id: int) -> None:
        """Delete a hotel. Unknown ids are ignored."""
        if self.repo.delete_by_id(hotel_id):
            logger.info(f"Deleted hotel #{hotel_id}")
        else:
            logger.warning(f"Delete requested for unknown hotel #{hotel_id}")

    def get_all_hotels(self, page: int, size: int) -> Page[Hotel]:
        """
        Return the zero-based `page` of all hotels, `size` per page,
        ordered by id.

        Raises:
            ValueError: If page is negative or size is below 1.
        """
        page_of_hotels = self.repo.find_all(PageRequest(page, size))
        if size > self.large_payload_threshold:
            self._count(LARGE_PAYLOAD_COUNTER)
        return page_of_hotels

    def redact_hotel_title(self, hotel_id: int) -> bool:
        """
        Mask e-mail addresses and phone numbers in a hotel's title.

        Returns:
            False if no hotel has this id.
        """
        with self.repo.transaction():
            redacted = self.repo.redact_title(hotel_id)
        if redacted:
            logger.info(f"Redacted title of hotel #{hotel_id}")
        return redacted

    def require_hotel(self, hotel_id: int) -> Hotel:
        """Like get_hotel, but raises HotelNotFoundError instead of returning None."""
        hotel = self.get_hotel(hotel_id)
        if hotel is None:
            raise HotelNotFoundError(hotel_id)
        return hotel

    def _count(self, counter_name: str) -> None:
        try:
            self.metrics.increment(counter_name)
        except Exception as e:
            logger.warning(f"Failed to increment metric '{counter_name}': {e}")
