"""
utils/exceptions.py
-------------------
Application exceptions shared by the service and handler layers.
Database errors are not wrapped: psycopg2 exceptions reach the caller as-is.
"""


class HotelBotError(Exception):
    """Base class for errors raised by this application."""


class HotelNotFoundError(HotelBotError):
    """Raised when an operation requires a hotel row that does not exist."""

    def __init__(self, hotel_id: int):
        super().__init__(f"Hotel #{hotel_id} not found")
        self.hotel_id = hotel_id
