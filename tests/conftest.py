import copy
import re
from contextlib import contextmanager
from typing import Optional

import pytest

from models.hotel import Hotel
from models.page import Page, PageRequest
from repositories.base import EMAIL_PATTERN, PHONE_PATTERN, REDACTION_MARK, HotelRepository
from services.hotel_service import HotelService
from utils.exceptions import HotelNotFoundError


def redact_pii(text: str) -> str:
    """Python equivalent of the regexp_replace calls in PostgresHotelRepository.redact_title."""
    text = re.sub(EMAIL_PATTERN, REDACTION_MARK, text)
    return re.sub(PHONE_PATTERN, REDACTION_MARK, text)


class InMemoryHotelRepository(HotelRepository):
    """HotelRepository kept in a dict. Stores copies, like a real database would."""

    def __init__(self) -> None:
        self.rows: dict[int, Hotel] = {}
        self._next_id = 1

    def save(self, hotel: Hotel) -> Hotel:
        if hotel.id is None:
            hotel.id = self._next_id
            self._next_id += 1
        elif hotel.id not in self.rows:
            raise HotelNotFoundError(hotel.id)
        self.rows[hotel.id] = copy.copy(hotel)
        return hotel

    def find_by_id(self, hotel_id: int) -> Optional[Hotel]:
        row = self.rows.get(hotel_id)
        return copy.copy(row) if row else None

    def find_all(self, page_request: PageRequest) -> Page[Hotel]:
        ordered = [self.rows[k] for k in sorted(self.rows)]
        chunk = ordered[page_request.offset:page_request.offset + page_request.size]
        return Page(
            items=tuple(copy.copy(h) for h in chunk),
            page=page_request.page,
            size=page_request.size,
            total_elements=len(ordered),
        )

    def delete_by_id(self, hotel_id: int) -> bool:
        return self.rows.pop(hotel_id, None) is not None

    def redact_title(self, hotel_id: int) -> bool:
        row = self.rows.get(hotel_id)
        if row is None:
            return False
        row.title = redact_pii(row.title)
        return True

    @contextmanager
    def transaction(self):
        snapshot = {k: copy.copy(v) for k, v in self.rows.items()}
        try:
            yield
        except Exception:
            self.rows = snapshot
            raise


class RecordingMetrics:
    def __init__(self) -> None:
        self.increments: list[str] = []

    def increment(self, counter_name: str) -> None:
        self.increments.append(counter_name)


@pytest.fixture
def repository():
    return InMemoryHotelRepository()


@pytest.fixture
def metrics():
    return RecordingMetrics()


@pytest.fixture
def hotel_service(repository, metrics):
    return HotelService(repository=repository, metrics=metrics)


@pytest.fixture
def make_hotel():
    """Hotel factory fixture."""

    def _factory(
        title: str = "Grand",
        description: Optional[str] = None,
        city: Optional[str] = "Lisbon",
        rating: Optional[int] = 4,
        hotel_id: Optional[int] = None,
    ) -> Hotel:
        return Hotel(title=title, description=description, city=city, rating=rating, id=hotel_id)

    return _factory
