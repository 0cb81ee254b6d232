from typing import Iterable, Iterator, List, Optional

from .exceptions import FrozenStateSetError, InvalidStateError


class StateSet:
    """
    A set of automaton state indices stored as a bit mask.

    Bit ``n`` of the mask is set when state ``n`` is a member, so union is a
    single ``|`` and equality compares two integers. Sets are mutable until
    ``freeze()`` is called; frozen sets are hashable and are what subset
    construction uses as dedup keys.
    """

    __slots__ = ('_bits', '_frozen')

    def __init__(self, states: Iterable[int] = (), capacity_hint: Optional[int] = None):
        # capacity_hint is unused, Python ints grow as needed
        self._bits = 0
        self._frozen = False
        for state in states:
            self.insert(state)

    @classmethod
    def empty(cls, capacity_hint: Optional[int] = None) -> 'StateSet':
        return cls(capacity_hint=capacity_hint)

    @classmethod
    def of(cls, *states: int) -> 'StateSet':
        return cls(states)

    @classmethod
    def from_key(cls, key: int) -> 'StateSet':
        """Rebuilds a set from its canonical key."""
        if key < 0:
            raise InvalidStateError(f"StateSet keys are non-negative, got {key}")
        state_set = cls()
        state_set._bits = key
        return state_set

    @property
    def key(self) -> int:
        """Canonical representation: equal sets always have equal keys."""
        return self._bits

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise FrozenStateSetError("Cannot modify a frozen StateSet")

    def insert(self, state: int) -> None:
        """
        Adds a state to the set. Adding an existing member is a no-op.

        Raises:
            InvalidStateError: If the state index is negative
            FrozenStateSetError: If the set has been frozen
        """
        self._check_mutable()
        if state < 0:
            raise InvalidStateError(f"State index must be non-negative, got {state}")
        self._bits |= 1 << state

    def union(self, other: 'StateSet') -> 'StateSet':
        """
        Adds every member of ``other`` to this set.

        Returns:
            StateSet: This set, to allow chaining
        """
        self._check_mutable()
        self._bits |= other._bits
        return self

    def freeze(self) -> 'StateSet':
        self._frozen = True
        return self

    def copy(self) -> 'StateSet':
        """Returns a mutable copy of the set."""
        return StateSet.from_key(self._bits)

    def frozen_copy(self) -> 'StateSet':
        if self._frozen:
            return self
        return StateSet.from_key(self._bits).freeze()

    def to_list(self) -> List[int]:
        return list(self)

    def __iter__(self) -> Iterator[int]:
        # Lowest set bit first, so members come out in ascending order
        bits = self._bits
        while bits:
            lowest = bits & -bits
            yield lowest.bit_length() - 1
            bits ^= lowest

    def __contains__(self, state: object) -> bool:
        if not isinstance(state, int) or state < 0:
            return False
        return bool(self._bits >> state & 1)

    def __len__(self) -> int:
        return bin(self._bits).count('1')

    def __bool__(self) -> bool:
        return self._bits != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateSet):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        if not self._frozen:
            raise TypeError("unhashable type: mutable 'StateSet' (call freeze() first)")
        return hash(self._bits)

    def __repr__(self) -> str:
        return '{' + ', '.join(str(state) for state in self) + '}'
