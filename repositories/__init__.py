"""
repositories/ - Data Access Layer
==================================
`base.HotelRepository` is the contract the service layer depends on;
`hotel_repo.PostgresHotelRepository` implements it with raw SQL and
returns domain model objects.
"""
