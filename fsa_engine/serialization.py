from collections import Counter
from typing import Dict, List, Union

from .alphabet import ALPHABET_SIZE
from .dfa import DFA, UNDEFINED
from .exceptions import InvalidDefinitionError
from .fsa_properties import parse_state_key, validate_fsa_structure
from .nfa import NFA

Automaton = Union[DFA, NFA]


def fsa_from_dict(fsa: Dict) -> Automaton:
    """
    Builds a DFA or NFA from its JSON definition.

    Args:
        fsa: A dictionary with the following keys:
            - type: 'dfa' or 'nfa'
            - numStates: Number of states
            - startingState: The starting state (optional, defaults to 0)
            - acceptingStates: List of accepting states
            - defaultTransitions: Targets applied to every symbol (optional)
            - transitions: {state: {symbol: [targets]}}

    Returns:
        The automaton described by the definition

    Raises:
        InvalidDefinitionError: If the definition is malformed
        SymbolOutOfRangeError: If a transition uses a symbol outside the alphabet
    """
    validation = validate_fsa_structure(fsa)
    if not validation['valid']:
        raise InvalidDefinitionError(validation['error'])

    if fsa['type'] == 'dfa':
        return dfa_from_dict(fsa)
    return nfa_from_dict(fsa)


def dfa_from_dict(fsa: Dict) -> DFA:
    dfa = DFA(fsa['numStates'], fsa.get('startingState', 0))

    # Defaults first, so explicit transitions overwrite them
    for state_key, targets in fsa.get('defaultTransitions', {}).items():
        dfa.set_transition_for_all_symbols(parse_state_key(state_key), _single_target(targets, state_key))

    for state_key, symbol_map in fsa['transitions'].items():
        src = parse_state_key(state_key)
        for symbol, targets in symbol_map.items():
            dfa.set_transition(src, symbol, _single_target(targets, state_key))

    for state in fsa['acceptingStates']:
        dfa.set_accepting(state, True)

    return dfa


def nfa_from_dict(fsa: Dict) -> NFA:
    nfa = NFA(fsa['numStates'], fsa.get('startingState', 0))

    for state_key, targets in fsa.get('defaultTransitions', {}).items():
        for target in _target_list(targets, state_key):
            nfa.add_transition_for_all_symbols(parse_state_key(state_key), target)

    for state_key, symbol_map in fsa['transitions'].items():
        src = parse_state_key(state_key)
        for symbol, targets in symbol_map.items():
            for target in _target_list(targets, state_key):
                nfa.add_transition(src, symbol, target)

    for state in fsa['acceptingStates']:
        nfa.set_accepting(state, True)

    return nfa


def _target_list(targets, state_key) -> List:
    if isinstance(targets, int) and not isinstance(targets, bool):
        return [targets]
    if not isinstance(targets, list):
        raise InvalidDefinitionError(f"Targets for state {state_key} must be a list of states")
    return targets


def _single_target(targets, state_key) -> int:
    targets = _target_list(targets, state_key)
    if len(targets) != 1:
        raise InvalidDefinitionError(
            f"DFA transitions from state {state_key} must have exactly one target, got {len(targets)}"
        )
    return targets[0]


def dfa_to_dict(dfa: DFA) -> Dict:
    """
    Serializes a DFA to its JSON definition.

    Rows without undefined cells store their most common target as the
    default transition and only list the symbols that differ from it.
    """
    default_transitions = {}
    transitions = {}

    for state in range(dfa.num_states):
        row = dfa.row(state)
        default = None
        if UNDEFINED not in row:
            default = Counter(row).most_common(1)[0][0]
            default_transitions[str(state)] = [default]

        symbol_map = {}
        for code, target in enumerate(row):
            if target != UNDEFINED and target != default:
                symbol_map[chr(code)] = [target]
        if symbol_map:
            transitions[str(state)] = symbol_map

    return {
        'type': 'dfa',
        'numStates': dfa.num_states,
        'startingState': dfa.start_state,
        'acceptingStates': dfa.accepting_states(),
        'defaultTransitions': default_transitions,
        'transitions': transitions,
    }


def nfa_to_dict(nfa: NFA) -> Dict:
    """
    Serializes an NFA to its JSON definition.

    Targets present on every symbol of a state are stored once as its
    default transitions.
    """
    default_transitions = {}
    transitions = {}

    for state in range(nfa.num_states):
        cells = [nfa.get_transitions(state, code) for code in range(ALPHABET_SIZE)]
        shared = [target for target in cells[0] if all(target in cell for cell in cells)]
        if shared:
            default_transitions[str(state)] = shared

        symbol_map = {}
        for code, cell in enumerate(cells):
            extra = [target for target in cell if target not in shared]
            if extra:
                symbol_map[chr(code)] = extra
        if symbol_map:
            transitions[str(state)] = symbol_map

    return {
        'type': 'nfa',
        'numStates': nfa.num_states,
        'startingState': nfa.start_state,
        'acceptingStates': nfa.accepting_states(),
        'defaultTransitions': default_transitions,
        'transitions': transitions,
    }


def fsa_to_dict(fsa: Automaton) -> Dict:
    if isinstance(fsa, DFA):
        return dfa_to_dict(fsa)
    return nfa_to_dict(fsa)
