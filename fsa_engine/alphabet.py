from typing import Iterable, List, Union

from .exceptions import SymbolOutOfRangeError

Symbol = Union[str, int]

# 7-bit ASCII
ALPHABET_SIZE = 128


def symbol_index(symbol: Symbol) -> int:
    """
    Converts a symbol to its index in the transition tables.

    Args:
        symbol: A one-character string or an integer code

    Returns:
        int: The symbol code in [0, ALPHABET_SIZE)

    Raises:
        SymbolOutOfRangeError: If the symbol is not part of the alphabet
    """
    if isinstance(symbol, str):
        if len(symbol) != 1:
            raise SymbolOutOfRangeError(symbol)
        code = ord(symbol)
    elif isinstance(symbol, int) and not isinstance(symbol, bool):
        code = symbol
    else:
        raise SymbolOutOfRangeError(symbol)

    if not 0 <= code < ALPHABET_SIZE:
        raise SymbolOutOfRangeError(symbol)
    return code


def symbol_indices(symbols: Iterable[Symbol]) -> List[int]:
    """Converts every symbol of a string (or iterable of codes) to its index."""
    return [symbol_index(symbol) for symbol in symbols]


def encode_input(input_string: str) -> List[int]:
    """
    Validates a whole input string before it is fed to an automaton.

    Args:
        input_string: The input string

    Returns:
        List[int]: The symbol codes of the input, in order

    Raises:
        SymbolOutOfRangeError: On the first character outside the alphabet,
            with its position recorded
    """
    codes = []
    for position, char in enumerate(input_string):
        code = ord(char)
        if code >= ALPHABET_SIZE:
            raise SymbolOutOfRangeError(char, position)
        codes.append(code)
    return codes


def is_printable(code: int) -> bool:
    return 32 <= code < 127


def format_symbol(code: int) -> str:
    """Renders a symbol code for display, escaping non-printable characters."""
    char = chr(code)
    if char == "'":
        return r"\'"
    if char == '\\':
        return r'\\'
    if is_printable(code):
        return char
    return f"\\x{code:02X}"
