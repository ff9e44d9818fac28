"""Bookings app package.

The shared booking core: the abstract reservation model every vertical
inherits, the capacity-aware inventory aggregate, stay pricing, overlap
checks with row locking, the shared reservation API actions and the
periodic tasks that expire holds and advance statuses.
"""
