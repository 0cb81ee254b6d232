from typing import Iterable, List

from .alphabet import ALPHABET_SIZE, Symbol, encode_input, symbol_index, symbol_indices
from .exceptions import InvalidStateError
from .state_set import StateSet


class NFA:
    """
    A nondeterministic finite automaton over the 128 ASCII symbols.

    Each (state, symbol) cell holds a StateSet of possible next states, which
    may be empty. Transitions are only ever added, never overwritten.
    """

    def __init__(self, num_states: int, start_state: int = 0):
        if num_states < 1:
            raise InvalidStateError(f"An NFA needs at least one state, got {num_states}")
        self._num_states = num_states
        self._table: List[List[StateSet]] = [
            [StateSet.empty(num_states) for _ in range(ALPHABET_SIZE)]
            for _ in range(num_states)
        ]
        self._accepting: List[bool] = [False] * num_states
        self._start_state = self._check_state(start_state)

    @property
    def num_states(self) -> int:
        return self._num_states

    @property
    def start_state(self) -> int:
        return self._start_state

    def _check_state(self, state: int) -> int:
        if not isinstance(state, int) or not 0 <= state < self._num_states:
            raise InvalidStateError(f"State {state!r} is not in [0, {self._num_states})")
        return state

    def add_transition(self, src: int, symbol: Symbol, dst: int) -> None:
        self._check_state(src)
        self._table[src][symbol_index(symbol)].insert(self._check_state(dst))

    def add_transition_for_symbols(self, src: int, symbols: Iterable[Symbol], dst: int) -> None:
        self._check_state(src)
        self._check_state(dst)
        row = self._table[src]
        for code in symbol_indices(symbols):
            row[code].insert(dst)

    def add_transition_for_all_symbols(self, src: int, dst: int) -> None:
        self._check_state(src)
        self._check_state(dst)
        for cell in self._table[src]:
            cell.insert(dst)

    def get_transitions(self, src: int, symbol: Symbol) -> StateSet:
        """Returns a frozen copy of the next states of ``src`` on ``symbol``."""
        return self._table[self._check_state(src)][symbol_index(symbol)].frozen_copy()

    def set_accepting(self, state: int, value: bool = True) -> None:
        """
        Marks a state as accepting.

        Same rules as ``DFA.set_accepting``: out-of-range states and
        ``value=False`` are ignored.
        """
        if not value:
            return
        if not isinstance(state, int) or not 0 <= state < self._num_states:
            return
        self._accepting[state] = True

    def is_accepting(self, state: int) -> bool:
        return self._accepting[self._check_state(state)]

    def accepting_states(self) -> List[int]:
        return [state for state, accepting in enumerate(self._accepting) if accepting]

    def move(self, states: StateSet, code: int) -> StateSet:
        """
        Computes the union of the transitions of every state in ``states``
        on the symbol with index ``code``.

        Args:
            states: The currently active states
            code: A symbol index, as returned by ``symbol_index``

        Returns:
            StateSet: A new, frozen set of next states
        """
        result = StateSet.empty(self._num_states)
        for state in states:
            result.union(self._table[state][code])
        return result.freeze()

    def successor_keys(self, states: StateSet) -> List[int]:
        """
        Computes ``move(states, code).key`` for every symbol at once.

        Returns:
            List[int]: ALPHABET_SIZE keys, indexed by symbol code
        """
        keys = [0] * ALPHABET_SIZE
        for state in states:
            keys = [key | cell.key for key, cell in zip(keys, self._table[state])]
        return keys

    def contains_accepting(self, states: StateSet) -> bool:
        return any(self._accepting[state] for state in states)

    def initial_states(self) -> StateSet:
        return StateSet.of(self._start_state).freeze()

    def execute(self, input_string: str) -> bool:
        """
        Runs the NFA on the input string by tracking the set of active states.

        Args:
            input_string: The input string

        Returns:
            bool: True if at least one active state is accepting once the
            whole input has been read

        Raises:
            SymbolOutOfRangeError: If the input contains a non-ASCII character
        """
        active = self.initial_states()
        for code in encode_input(input_string):
            active = self.move(active, code)
            # The empty set only ever moves to itself
            if not active:
                return False
        return self.contains_accepting(active)

    def __repr__(self) -> str:
        return f"NFA(num_states={self._num_states}, start_state={self._start_state}, " \
               f"accepting={self.accepting_states()})"
