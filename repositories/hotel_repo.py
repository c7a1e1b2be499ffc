"""
repositories/hotel_repo.py
--------------------------
Data access layer for hotels.
All SQL queries related to the `hotels` table live here.
"""

from typing import Optional

from db import connection as db
from models.hotel import Hotel
from models.page import Page, PageRequest
from repositories.base import EMAIL_PATTERN, PHONE_PATTERN, REDACTION_MARK, HotelRepository
from utils.exceptions import HotelNotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, title, description, city, rating, created_at"


class PostgresHotelRepository(HotelRepository):
    """Repository for CRUD operations on the hotels table."""

    # ── CREATE / UPDATE ───────────────────────────────────

    def save(self, hotel: Hotel) -> Hotel:
        """
        Persist a hotel.

        Args:
            hotel: New hotel (id is None) or an existing one to overwrite.

        Returns:
            The same Hotel with `id` and `created_at` populated.

        Raises:
            HotelNotFoundError: If an update targets a missing id.
        """
        if hotel.id is None:
            return self._insert(hotel)
        return self._update(hotel)

    def _insert(self, hotel: Hotel) -> Hotel:
        sql = """
            INSERT INTO hotels (title, description, city, rating)
            VALUES (%s, %s, %s, %s)
            RETURNING id, created_at;
        """
        try:
            with db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (hotel.title, hotel.description, hotel.city, hotel.rating))
                    row = cur.fetchone()
        except Exception as e:
            logger.error(f"Failed to insert hotel '{hotel.title}': {e}")
            raise
        hotel.id = row[0]
        hotel.created_at = row[1]
        return hotel

    def _update(self, hotel: Hotel) -> Hotel:
        sql = """
            UPDATE hotels
            SET title = %s, description = %s, city = %s, rating = %s
            WHERE id = %s
            RETURNING created_at;
        """
        try:
            with db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (
                        hotel.title, hotel.description, hotel.city,
                        hotel.rating, hotel.id,
                    ))
                    row = cur.fetchone()
                if row is None:
                    raise HotelNotFoundError(hotel.id)
        except HotelNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to update hotel {hotel.id}: {e}")
            raise
        hotel.created_at = row[0]
        return hotel

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, hotel_id: int) -> Optional[Hotel]:
        """Fetch a hotel by primary key, or None."""
        sql = f"SELECT {_COLUMNS} FROM hotels WHERE id = %s;"
        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (hotel_id,))
                row = cur.fetchone()
        return self._row_to_hotel(row) if row else None

    def find_all(self, page_request: PageRequest) -> Page[Hotel]:
        """Fetch one page of hotels ordered by id, with the total row count."""
        count_sql = "SELECT COUNT(*) FROM hotels;"
        page_sql = f"SELECT {_COLUMNS} FROM hotels ORDER BY id LIMIT %s OFFSET %s;"
        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(count_sql)
                total = cur.fetchone()[0]
                cur.execute(page_sql, (page_request.size, page_request.offset))
                rows = cur.fetchall()
        return Page(
            items=tuple(self._row_to_hotel(r) for r in rows),
            page=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    # ── DELETE ────────────────────────────────────────────

    def delete_by_id(self, hotel_id: int) -> bool:
        """Delete a hotel by id. Returns True if a row was deleted."""
        sql = "DELETE FROM hotels WHERE id = %s;"
        try:
            with db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (hotel_id,))
                    return cur.rowcount > 0
        except Exception as e:
            logger.error(f"Failed to delete hotel {hotel_id}: {e}")
            raise

    # ── MAINTENANCE ───────────────────────────────────────

    def redact_title(self, hotel_id: int) -> bool:
        """Replace e-mail addresses and phone numbers in the title."""
        sql = """
            UPDATE hotels
            SET title = regexp_replace(regexp_replace(title, %s, %s, 'g'), %s, %s, 'g')
            WHERE id = %s;
        """
        try:
            with db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (
                        EMAIL_PATTERN, REDACTION_MARK,
                        PHONE_PATTERN, REDACTION_MARK,
                        hotel_id,
                    ))
                    return cur.rowcount > 0
        except Exception as e:
            logger.error(f"Failed to redact title of hotel {hotel_id}: {e}")
            raise

    def transaction(self):
        return db.transaction()

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_hotel(row: tuple) -> Hotel:
        """Convert a database row to a Hotel object."""
        return Hotel(
            id=row[0],
            title=row[1],
            description=row[2],
            city=row[3],
            rating=row[4],
            created_at=row[5],
        )
