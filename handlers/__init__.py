"""
handlers/ - Presentation Layer
================================
Telegram command handlers. Each one parses the command arguments, calls
the HotelService found in `bot_data`, and replies with the result.
"""
