"""Common base for domain entities."""

from typing import Optional
from uuid import UUID, uuid4


class Entity:
    """
    Domain object with identity.

    State is kept in private attributes and exposed through read-only
    properties; subclasses mutate it only through validating set_* methods.
    Two entities are equal when they share an id.
    """

    def __init__(self, entity_id: Optional[UUID] = None):
        self._id = entity_id or uuid4()

    @property
    def id(self) -> UUID:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id})"

    def snapshot(self) -> dict:
        """Copy of the current state; list attributes are copied too."""
        return {
            key: list(value) if isinstance(value, list) else value
            for key, value in vars(self).items()
        }

    def restore(self, state: dict) -> None:
        """Put back a state taken with snapshot(). No validation is run."""
        vars(self).clear()
        vars(self).update(
            (key, list(value) if isinstance(value, list) else value)
            for key, value in state.items()
        )
