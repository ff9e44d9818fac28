"""
Base Domain Classes

Foundational building blocks shared by the booking verticals:
- Entity: Objects with unique identity
- ValueObject: Immutable objects compared by value
"""

from abc import ABC
from dataclasses import dataclass, field
from uuid import UUID, uuid4


@dataclass
class Entity(ABC):
    """
    Base class for all entities

    Entities have unique identity and are mutable.
    Two entities are equal if their IDs are equal.
    """
    id: UUID = field(default_factory=uuid4)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass
