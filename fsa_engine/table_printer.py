from typing import Dict, List, Optional, Sequence

from .alphabet import ALPHABET_SIZE, format_symbol
from .dfa import DFA, UNDEFINED
from .nfa import NFA
from .state_set import StateSet

# Tables group symbols by destination: one row per (state, destination).


def symbols_to_ranges(codes: Sequence[int]) -> List[str]:
    """
    Compresses sorted symbol codes into readable ranges.

    Example: codes for a..z and '_' give ["'_'", "'a'-'z'"].
    """
    out: List[str] = []
    i = 0
    while i < len(codes):
        j = i
        while j + 1 < len(codes) and codes[j + 1] == codes[j] + 1:
            j += 1
        if i == j:
            out.append(f"'{format_symbol(codes[i])}'")
        else:
            out.append(f"'{format_symbol(codes[i])}'-'{format_symbol(codes[j])}'")
        i = j + 1
    return out


def format_symbols(codes: Sequence[int], max_chunks: int = 10) -> str:
    if len(codes) == ALPHABET_SIZE:
        return 'any'
    chunks = symbols_to_ranges(codes)
    if not chunks:
        return '∅'
    if len(chunks) <= max_chunks:
        return ', '.join(chunks)
    head = ', '.join(chunks[:max_chunks])
    return f"{head}, ... (+{len(chunks) - max_chunks} more)"


def make_table(rows: List[List[str]], headers: List[str]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for column, cell in enumerate(row):
            widths[column] = max(widths[column], len(cell))

    def format_row(row: List[str]) -> str:
        return ' | '.join(cell.ljust(widths[column]) for column, cell in enumerate(row)).rstrip()

    separator = '-+-'.join('-' * width for width in widths)
    lines = [format_row(headers), separator]
    lines.extend(format_row(row) for row in rows)
    return '\n'.join(lines)


def _markers(state: int, start_state: int, accepting: bool) -> str:
    markers = []
    if state == start_state:
        markers.append('START')
    if accepting:
        markers.append('ACCEPT')
    return ','.join(markers)


def _group_rows(state: int, markers: str, groups: Dict[str, List[int]]) -> List[List[str]]:
    rows = []
    first_row = True
    for destination, codes in groups.items():
        # Repeated columns are blanked on follow-up rows of the same state
        rows.append([
            str(state) if first_row else '',
            markers if first_row else '',
            destination,
            format_symbols(codes),
        ])
        first_row = False
    if not rows:
        rows.append([str(state), markers, '', ''])
    return rows


def format_dfa_table(dfa: DFA, title: Optional[str] = None) -> str:
    """
    Renders a DFA transition table.

    Columns: State | Markers | Dest | Symbols. Undefined transitions are
    shown with the destination '-'.
    """
    rows: List[List[str]] = []
    for state in range(dfa.num_states):
        targets: Dict[int, List[int]] = {}
        for code, target in enumerate(dfa.row(state)):
            targets.setdefault(target, []).append(code)

        groups = {
            ('-' if target == UNDEFINED else str(target)): targets[target]
            for target in sorted(targets)
        }
        markers = _markers(state, dfa.start_state, dfa.is_accepting(state))
        rows.extend(_group_rows(state, markers, groups))

    header = title or f"DFA has {dfa.num_states} states"
    return f"{header}\n{make_table(rows, ['State', 'Markers', 'Dest', 'Symbols'])}"


def format_nfa_table(nfa: NFA, title: Optional[str] = None) -> str:
    """
    Renders an NFA transition table.

    Each row lists one destination state and every symbol on which the
    source state can move there.
    """
    rows: List[List[str]] = []
    for state in range(nfa.num_states):
        targets: Dict[int, List[int]] = {}
        for code in range(ALPHABET_SIZE):
            for target in nfa.get_transitions(state, code):
                targets.setdefault(target, []).append(code)

        groups = {str(target): targets[target] for target in sorted(targets)}
        markers = _markers(state, nfa.start_state, nfa.is_accepting(state))
        rows.extend(_group_rows(state, markers, groups))

    header = title or f"NFA has {nfa.num_states} states"
    return f"{header}\n{make_table(rows, ['State', 'Markers', 'Dest', 'Symbols'])}"


def format_subsets(subsets: Sequence[StateSet]) -> str:
    """Renders which NFA states each converted DFA state stands for."""
    rows = [[str(index), repr(subset)] for index, subset in enumerate(subsets)]
    return make_table(rows, ['DFA state', 'NFA states'])
