from collections import deque
from typing import Dict, List, Set

from .dfa import DFA, UNDEFINED

FSA_TYPES = ('dfa', 'nfa')


def reachable_states(dfa: DFA) -> Set[int]:
    """
    Finds every state reachable from the starting state.

    Args:
        dfa: The automaton to explore

    Returns:
        Set[int]: The reachable states, including the starting state
    """
    reachable = {dfa.start_state}
    queue = deque([dfa.start_state])

    while queue:
        current = queue.popleft()
        for target in dfa.row(current):
            if target != UNDEFINED and target not in reachable:
                reachable.add(target)
                queue.append(target)

    return reachable


def is_total(dfa: DFA) -> bool:
    """
    Checks that every transition out of a reachable state is defined.

    Unreachable states are ignored, since execution can never visit them.
    """
    for state in reachable_states(dfa):
        if UNDEFINED in dfa.row(state):
            return False
    return True


def is_dead_state(dfa: DFA, state: int) -> bool:
    """
    Checks whether a state is a trap: non-accepting, with every transition
    looping back to itself.
    """
    if dfa.is_accepting(state):
        return False
    return all(target == state for target in dfa.row(state))


def dead_states(dfa: DFA) -> List[int]:
    return [state for state in range(dfa.num_states) if is_dead_state(dfa, state)]


def check_all_properties(dfa: DFA) -> Dict:
    """
    Collects the structural properties of a DFA.

    Returns:
        Dict: A dictionary with the state count, reachable state count,
        totality flag, dead states and accepting states
    """
    reachable = reachable_states(dfa)
    return {
        'states_count': dfa.num_states,
        'reachable_states_count': len(reachable),
        'is_total': is_total(dfa),
        'dead_states': dead_states(dfa),
        'accepting_states': dfa.accepting_states(),
        'transitions_count': sum(
            1 for state in range(dfa.num_states) for target in dfa.row(state) if target != UNDEFINED
        ),
    }


def validate_fsa_structure(fsa: Dict) -> Dict:
    """
    Validates that a serialized FSA definition has the required structure.

    Args:
        fsa: The FSA definition dictionary to validate

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(fsa, dict):
        return {'valid': False, 'error': 'FSA must be a dictionary'}

    required_keys = ['type', 'numStates', 'acceptingStates', 'transitions']

    for key in required_keys:
        if key not in fsa:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    if fsa['type'] not in FSA_TYPES:
        return {'valid': False, 'error': f"type must be one of {', '.join(FSA_TYPES)}"}

    num_states = fsa['numStates']
    if not isinstance(num_states, int) or isinstance(num_states, bool) or num_states < 1:
        return {'valid': False, 'error': 'numStates must be a positive integer'}

    if not isinstance(fsa['acceptingStates'], list):
        return {'valid': False, 'error': 'acceptingStates must be a list'}

    if not isinstance(fsa['transitions'], dict):
        return {'valid': False, 'error': 'transitions must be a dictionary'}

    if not isinstance(fsa.get('defaultTransitions', {}), dict):
        return {'valid': False, 'error': 'defaultTransitions must be a dictionary'}

    starting_state = fsa.get('startingState', 0)
    if not _is_state(starting_state, num_states):
        return {'valid': False, 'error': 'Starting state not in states range'}

    # Stricter than set_accepting, which ignores out-of-range states
    for state in fsa['acceptingStates']:
        if not _is_state(state, num_states):
            return {'valid': False, 'error': f'Accepting state {state} not in states range'}

    for section in ('defaultTransitions', 'transitions'):
        for state_key, value in fsa.get(section, {}).items():
            if not _is_state(parse_state_key(state_key), num_states):
                return {'valid': False, 'error': f'{section} refers to unknown state {state_key}'}
            if section == 'transitions' and not isinstance(value, dict):
                return {'valid': False, 'error': f'transitions for state {state_key} must be a dictionary'}

    return {'valid': True}


def parse_state_key(key) -> object:
    # JSON object keys are always strings
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return key


def _is_state(value: object, num_states: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < num_states
