from typing import Iterable, List, Sequence

from .alphabet import ALPHABET_SIZE, Symbol, encode_input, symbol_index, symbol_indices
from .exceptions import InvalidStateError

# Marks a transition that has not been set
UNDEFINED = -1


class DFA:
    """
    A deterministic finite automaton over the 128 ASCII symbols.

    States are the integers ``0 .. num_states - 1``. Every state owns a row of
    ``ALPHABET_SIZE`` cells holding the next state, or ``UNDEFINED``. An
    automaton is built by editing transitions and accepting flags, then
    executed read-only.
    """

    def __init__(self, num_states: int, start_state: int = 0):
        if num_states < 1:
            raise InvalidStateError(f"A DFA needs at least one state, got {num_states}")
        self._num_states = num_states
        self._table: List[List[int]] = [[UNDEFINED] * ALPHABET_SIZE for _ in range(num_states)]
        self._accepting: List[bool] = [False] * num_states
        self._start_state = self._check_state(start_state)

    @classmethod
    def from_table(cls, rows: Sequence[Sequence[int]], accepting: Iterable[int],
                   start_state: int = 0) -> 'DFA':
        """
        Builds a DFA from complete transition rows.

        Args:
            rows: One row of ALPHABET_SIZE targets (or UNDEFINED) per state
            accepting: Indices of the accepting states
            start_state: The starting state

        Returns:
            DFA: The new automaton

        Raises:
            InvalidStateError: If a row has the wrong width or a target is out of range
        """
        dfa = cls(len(rows), start_state)
        for src, row in enumerate(rows):
            if len(row) != ALPHABET_SIZE:
                raise InvalidStateError(f"Row {src} has {len(row)} cells, expected {ALPHABET_SIZE}")
            defined = [dst for dst in row if dst != UNDEFINED]
            if defined and (min(defined) < 0 or max(defined) >= dfa._num_states):
                raise InvalidStateError(f"Row {src} has a target outside [0, {dfa._num_states})")
            dfa._table[src] = list(row)
        for state in accepting:
            dfa.set_accepting(state, True)
        return dfa

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

    def set_transition(self, src: int, symbol: Symbol, dst: int) -> None:
        self._check_state(src)
        self._check_state(dst)
        self._table[src][symbol_index(symbol)] = dst

    def set_transition_for_symbols(self, src: int, symbols: Iterable[Symbol], dst: int) -> None:
        """Sets the transition from ``src`` to ``dst`` on each of the given symbols."""
        self._check_state(src)
        self._check_state(dst)
        row = self._table[src]
        for code in symbol_indices(symbols):
            row[code] = dst

    def set_transition_for_all_symbols(self, src: int, dst: int) -> None:
        self._check_state(src)
        self._check_state(dst)
        self._table[src] = [dst] * ALPHABET_SIZE

    def get_transition(self, src: int, symbol: Symbol) -> int:
        return self._table[self._check_state(src)][symbol_index(symbol)]

    def row(self, src: int) -> List[int]:
        """Returns a copy of the transition row of ``src``, indexed by symbol code."""
        return list(self._table[self._check_state(src)])

    def set_accepting(self, state: int, value: bool = True) -> None:
        """
        Marks a state as accepting.

        Requests that cannot be honoured are ignored: a state index outside
        the automaton, or ``value=False`` (an accepting flag is never cleared).
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

    def is_undefined(self, src: int, symbol: Symbol) -> bool:
        return self.get_transition(src, symbol) == UNDEFINED

    def execute(self, input_string: str) -> bool:
        """
        Runs the DFA on the input string.

        Args:
            input_string: The input string

        Returns:
            bool: True if the DFA ends in an accepting state. Reaching an
            undefined transition rejects the input.

        Raises:
            SymbolOutOfRangeError: If the input contains a non-ASCII character
        """
        current = self._start_state
        for code in encode_input(input_string):
            current = self._table[current][code]
            # Undefined cells behave as a non-accepting sink
            if current == UNDEFINED:
                return False
        return self._accepting[current]

    def __repr__(self) -> str:
        return f"DFA(num_states={self._num_states}, start_state={self._start_state}, " \
               f"accepting={self.accepting_states()})"
