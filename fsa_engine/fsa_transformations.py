import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

from .alphabet import ALPHABET_SIZE
from .dfa import DFA
from .exceptions import StateExplosionError
from .nfa import NFA
from .state_set import StateSet

logger = logging.getLogger(__name__)


@dataclass
class SubsetConstruction:
    """Result of converting an NFA: the DFA plus the NFA states behind each DFA state."""
    dfa: DFA
    subsets: List[StateSet]

    def subset_for(self, dfa_state: int) -> StateSet:
        return self.subsets[dfa_state]

    def dfa_state_for(self, subset: StateSet) -> Optional[int]:
        for index, candidate in enumerate(self.subsets):
            if candidate == subset:
                return index
        return None


def subset_construction(nfa: NFA, max_states: Optional[int] = None) -> SubsetConstruction:
    """
    Converts a non-deterministic finite automaton (NFA) to a deterministic finite automaton (DFA)
    using the subset construction algorithm.

    Each DFA state stands for a set of NFA states reachable together. Only sets
    reachable from the NFA's starting state are discovered, in breadth-first
    order, so DFA state 0 is always ``{start_state}``. The empty set, when
    reachable, becomes a non-accepting state that loops to itself on every symbol.

    Args:
        nfa (NFA): The automaton to convert
        max_states (Optional[int]): Upper bound on the number of DFA states

    Returns:
        SubsetConstruction: The DFA and the list of NFA state sets, indexed by DFA state

    Raises:
        StateExplosionError: If more than ``max_states`` subsets are discovered
    """
    start = nfa.initial_states()

    # discovered[i] is the NFA state set represented by DFA state i
    discovered: List[StateSet] = [start]
    index_of: Dict[int, int] = {start.key: 0}
    rows: List[List[int]] = []
    accepting: List[int] = []

    # Subsets are enqueued in discovery order, so the queue holds DFA indices
    worklist: Deque[int] = deque([0])

    while worklist:
        current = worklist.popleft()
        current_set = discovered[current]

        # Decided once per subset, independent of the symbol loop below
        if nfa.contains_accepting(current_set):
            accepting.append(current)

        row = [0] * ALPHABET_SIZE
        for code, target_key in enumerate(nfa.successor_keys(current_set)):
            target = index_of.get(target_key)

            if target is None:
                target = len(discovered)
                if max_states is not None and target >= max_states:
                    raise StateExplosionError(max_states)
                discovered.append(StateSet.from_key(target_key).freeze())
                index_of[target_key] = target
                worklist.append(target)

            row[code] = target

        rows.append(row)

    logger.debug("Subset construction built %d DFA states from a %d-state NFA",
                 len(discovered), nfa.num_states)

    dfa = DFA.from_table(rows, accepting)
    return SubsetConstruction(dfa=dfa, subsets=discovered)


def nfa_to_dfa(nfa: NFA, max_states: Optional[int] = None) -> DFA:
    """
    Converts an NFA to a DFA accepting exactly the same language.

    Args:
        nfa (NFA): The automaton to convert
        max_states (Optional[int]): Upper bound on the number of DFA states

    Returns:
        DFA: The equivalent deterministic automaton
    """
    return subset_construction(nfa, max_states).dfa
