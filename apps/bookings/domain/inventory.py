"""
Inventory Aggregate

The consistency boundary for preventing overbooking. A unit of inventory
(a room type with several identical rooms, a single car, a tour departure)
has a capacity; every reservation allocates a quantity for a date range.

Strategy:
1. Domain validation: can_allocate() checks nightly usage against capacity
2. Pessimistic locking: SELECT FOR UPDATE on the overlapping reservations
   (see apps.bookings.services.lock_queryset_if_possible)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List

from apps.bookings.exceptions import BookingConflictError
from shared.domain.base import Entity
from shared.domain.value_objects import DateRange


@dataclass
class Allocation:
    """A reserved date range for one reservation."""
    reservation_id: Any
    dates: DateRange
    quantity: int = 1

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("Allocation quantity must be at least 1")


@dataclass
class Inventory(Entity):
    """
    Inventory Aggregate Root

    Key invariants:
    - On every night, the sum of allocated quantities never exceeds capacity
    - Adjacent ranges do not overlap (end date is exclusive)

    With capacity 1 this degrades to the plain "no overlapping bookings"
    rule used for cars and single rooms.

    Usage:
        inventory = Inventory.from_ranges(room.total_units, existing_ranges)
        if inventory.can_allocate(requested):
            inventory.allocate(booking.pk, requested)
    """

    capacity: int = 1
    allocations: List[Allocation] = field(default_factory=list)

    def __post_init__(self):
        if self.capacity < 0:
            raise ValueError("Capacity cannot be negative")

    @classmethod
    def from_ranges(cls, capacity: int, ranges: Iterable[DateRange]) -> "Inventory":
        inventory = cls(capacity=capacity)
        for index, dates in enumerate(ranges):
            inventory.allocations.append(Allocation(reservation_id=index, dates=dates))
        return inventory

    def usage_on(self, day) -> int:
        return sum(a.quantity for a in self.allocations if a.dates.contains(day))

    def peak_usage(self, dates: DateRange) -> int:
        """Highest number of units taken on any single night of the range."""
        overlapping = self.get_allocations_for_period(dates)
        if not overlapping:
            return 0
        return max(
            sum(a.quantity for a in overlapping if a.dates.contains(day))
            for day in dates.nights()
        )

    def available_units(self, dates: DateRange) -> int:
        return max(self.capacity - self.peak_usage(dates), 0)

    def can_allocate(self, dates: DateRange, quantity: int = 1) -> bool:
        return self.peak_usage(dates) + quantity <= self.capacity

    def allocate(self, reservation_id: Any, dates: DateRange, quantity: int = 1) -> Allocation:
        """
        Reserve `quantity` units for the range.

        Raises:
            BookingConflictError: If any night of the range is already full
        """
        if not self.can_allocate(dates, quantity):
            raise BookingConflictError(
                f"Only {self.available_units(dates)} of {self.capacity} unit(s) "
                f"available for {dates}."
            )

        allocation = Allocation(reservation_id=reservation_id, dates=dates, quantity=quantity)
        self.allocations.append(allocation)
        return allocation

    def deallocate(self, reservation_id: Any) -> None:
        allocation = next(
            (a for a in self.allocations if a.reservation_id == reservation_id),
            None,
        )
        if allocation is None:
            raise ValueError(f"No allocation found for reservation {reservation_id}")
        self.allocations.remove(allocation)

    def get_allocations_for_period(self, dates: DateRange) -> List[Allocation]:
        return [a for a in self.allocations if a.dates.overlaps_with(dates)]

    def __str__(self):
        return f"Inventory(capacity={self.capacity}, allocations={len(self.allocations)})"
