from typing import Dict, List, Tuple, Union

from .alphabet import ALPHABET_SIZE
from .dfa import DFA
from .nfa import NFA

DfaStep = Tuple[int, str, int]
NfaStep = Tuple[List[int], str, List[int]]


def simulate_deterministic_fsa(dfa: DFA, input_string: str) -> Union[List[DfaStep], Dict]:
    """
    Simulates a DFA with the given input string, recording every transition taken.

    Args:
        dfa: The automaton to run
        input_string: The input string to simulate

    Returns:
        If the input is accepted, returns a list of transitions in the format:
        [(current_state, symbol, next_state), ...].
        If the input is rejected, returns a dictionary with:
        {
            'accepted': False,
            'path': [(current_state, symbol, next_state), ...],  # Path up to rejection
            'rejection_reason': str,  # Why rejected
            'rejection_position': int  # Position where rejection occurred
        }
    """
    current_state = dfa.start_state
    execution_path = []

    for position, symbol in enumerate(input_string):
        if ord(symbol) >= ALPHABET_SIZE:
            return {
                'accepted': False,
                'path': execution_path,
                'rejection_reason': f"Symbol '{symbol}' not in alphabet",
                'rejection_position': position
            }

        # An undefined transition is an implicit non-accepting sink
        if dfa.is_undefined(current_state, symbol):
            return {
                'accepted': False,
                'path': execution_path,
                'rejection_reason': f"No transition defined for symbol '{symbol}' from state {current_state}",
                'rejection_position': position
            }

        next_state = dfa.get_transition(current_state, symbol)
        execution_path.append((current_state, symbol, next_state))
        current_state = next_state

    if dfa.is_accepting(current_state):
        return execution_path
    else:
        return {
            'accepted': False,
            'path': execution_path,
            'rejection_reason': f"Final state {current_state} is not an accepting state",
            'rejection_position': len(input_string)
        }


def simulate_nondeterministic_fsa(nfa: NFA, input_string: str) -> Union[List[NfaStep], Dict]:
    """
    Simulates an NFA with the given input string by tracking the set of active states.

    Args:
        nfa: The automaton to run
        input_string: The input string to simulate

    Returns:
        If the input is accepted, returns the list of steps in the format:
        [(active_states_before, symbol, active_states_after), ...].
        If the input is rejected, returns a dictionary with:
        {
            'accepted': False,
            'steps': [...],  # Steps up to rejection
            'final_states': [...],  # Active states when the simulation stopped
            'rejection_reason': str,
            'rejection_position': int
        }
    """
    active = nfa.initial_states()
    steps = []

    for position, symbol in enumerate(input_string):
        if ord(symbol) >= ALPHABET_SIZE:
            return {
                'accepted': False,
                'steps': steps,
                'final_states': active.to_list(),
                'rejection_reason': f"Symbol '{symbol}' not in alphabet",
                'rejection_position': position
            }

        next_active = nfa.move(active, ord(symbol))
        steps.append((active.to_list(), symbol, next_active.to_list()))
        active = next_active

        # Once no state is active, no suffix can bring one back
        if not active:
            return {
                'accepted': False,
                'steps': steps,
                'final_states': [],
                'rejection_reason': f"No active states after symbol '{symbol}'",
                'rejection_position': position
            }

    if nfa.contains_accepting(active):
        return steps
    else:
        return {
            'accepted': False,
            'steps': steps,
            'final_states': active.to_list(),
            'rejection_reason': f"None of the final states {active.to_list()} is accepting",
            'rejection_position': len(input_string)
        }


def is_accepted(result: Union[List, Dict]) -> bool:
    """Interprets the result of either simulator."""
    return isinstance(result, list)
