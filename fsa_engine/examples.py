from dataclasses import dataclass
from typing import Callable, Dict, List, Union

from .dfa import DFA
from .nfa import NFA

Automaton = Union[DFA, NFA]


def dfa_for_exactly_ullman() -> DFA:
    """DFA accepting exactly the string "ullman"."""
    dfa = DFA(8)
    trap = 7
    dfa.set_accepting(6, True)

    for state, char in enumerate('ullman'):
        dfa.set_transition_for_all_symbols(state, trap)
        dfa.set_transition(state, char, state + 1)

    dfa.set_transition_for_all_symbols(6, trap)
    dfa.set_transition_for_all_symbols(trap, trap)
    return dfa


def dfa_for_starts_with_com() -> DFA:
    """DFA accepting strings that start with "com"."""
    dfa = DFA(5)
    trap = 4
    dfa.set_accepting(3, True)

    for state, char in enumerate('com'):
        dfa.set_transition_for_all_symbols(state, trap)
        dfa.set_transition(state, char, state + 1)

    dfa.set_transition_for_all_symbols(3, 3)
    dfa.set_transition_for_all_symbols(trap, trap)
    return dfa


def dfa_for_three_consecutive_threes() -> DFA:
    """DFA accepting strings that contain "333"."""
    dfa = DFA(4)
    dfa.set_accepting(3, True)

    # Any other symbol breaks the run and starts the count again
    for state in range(3):
        dfa.set_transition_for_all_symbols(state, 0)
        dfa.set_transition(state, '3', state + 1)

    dfa.set_transition_for_all_symbols(3, 3)
    return dfa


def dfa_for_exactly_three_threes() -> DFA:
    """DFA accepting strings with exactly three '3' symbols, anywhere."""
    dfa = DFA(5)
    too_many = 4
    dfa.set_accepting(3, True)

    for state in range(4):
        dfa.set_transition_for_all_symbols(state, state)
        dfa.set_transition(state, '3', state + 1)

    dfa.set_transition_for_all_symbols(too_many, too_many)
    return dfa


def dfa_for_even_zeros_odd_ones() -> DFA:
    """
    DFA accepting binary strings with an even number of 0s and an odd number of 1s.

    States track parity: 0 = (even 0s, even 1s), 1 = (odd, even),
    2 = (even, odd), 3 = (odd, odd). State 4 traps non-binary input.
    """
    dfa = DFA(5)
    trap = 4
    dfa.set_accepting(2, True)

    parity_moves = {
        0: (1, 2),
        1: (0, 3),
        2: (3, 0),
        3: (2, 1),
    }
    for state, (on_zero, on_one) in parity_moves.items():
        dfa.set_transition_for_all_symbols(state, trap)
        dfa.set_transition(state, '0', on_zero)
        dfa.set_transition(state, '1', on_one)

    dfa.set_transition_for_all_symbols(trap, trap)
    return dfa


def nfa_for_ends_with_gs() -> NFA:
    """NFA accepting strings that end in "gs"."""
    nfa = NFA(3)
    nfa.set_accepting(2, True)

    nfa.add_transition_for_all_symbols(0, 0)
    nfa.add_transition(0, 'g', 1)
    nfa.add_transition(1, 's', 2)
    return nfa


def nfa_for_contains_mas() -> NFA:
    """NFA accepting strings that contain "mas"."""
    nfa = NFA(4)
    nfa.set_accepting(3, True)

    nfa.add_transition_for_all_symbols(0, 0)
    nfa.add_transition(0, 'm', 1)
    nfa.add_transition(1, 'a', 2)
    nfa.add_transition(2, 's', 3)
    nfa.add_transition_for_all_symbols(3, 3)
    return nfa


# Letter counts of "codebreaker"
CODEBREAKER_COUNTS = {'a': 1, 'b': 1, 'c': 1, 'd': 1, 'e': 3, 'k': 1, 'o': 1, 'r': 2}


def nfa_for_not_anagram_of_codebreaker() -> NFA:
    """
    NFA accepting strings that use some letter of "codebreaker" more often
    than "codebreaker" does, and so cannot be an anagram of it.

    Each letter gets a chain of states guessing which occurrence is the
    surplus one; every state loops to itself on any symbol.
    """
    num_states = 1 + sum(count + 1 for count in CODEBREAKER_COUNTS.values())
    nfa = NFA(num_states)

    for state in range(num_states):
        nfa.add_transition_for_all_symbols(state, state)

    next_state = 1
    for letter, count in CODEBREAKER_COUNTS.items():
        previous = 0
        for _ in range(count + 1):
            nfa.add_transition(previous, letter, next_state)
            previous = next_state
            next_state += 1
        nfa.set_accepting(previous, True)

    return nfa


@dataclass(frozen=True)
class Example:
    name: str
    kind: str
    description: str
    factory: Callable[[], Automaton]

    def build(self) -> Automaton:
        return self.factory()


# Ordered as the demo walks through them
EXAMPLES: List[Example] = [
    Example('exactly_ullman', 'dfa', 'DFA that recognizes exactly "ullman"', dfa_for_exactly_ullman),
    Example('starts_with_com', 'dfa', 'DFA that recognizes strings starting with "com"', dfa_for_starts_with_com),
    Example('three_consecutive_threes', 'dfa', 'DFA that recognizes strings containing "333"',
            dfa_for_three_consecutive_threes),
    Example('exactly_three_threes', 'dfa', 'DFA that recognizes strings with exactly three "3"',
            dfa_for_exactly_three_threes),
    Example('even_zeros_odd_ones', 'dfa', "DFA that recognizes binary strings with even 0's and odd 1's",
            dfa_for_even_zeros_odd_ones),
    Example('ends_with_gs', 'nfa', 'NFA that recognizes strings ending with "gs"', nfa_for_ends_with_gs),
    Example('contains_mas', 'nfa', 'NFA that recognizes strings containing "mas"', nfa_for_contains_mas),
    Example('not_anagram_of_codebreaker', 'nfa', 'NFA that recognizes strings that are not anagrams of "codebreaker"',
            nfa_for_not_anagram_of_codebreaker),
]

EXAMPLES_BY_NAME: Dict[str, Example] = {example.name: example for example in EXAMPLES}


def get_example(name: str) -> Example:
    """
    Looks up an example automaton by name.

    Raises:
        KeyError: If no example has that name
    """
    return EXAMPLES_BY_NAME[name]
