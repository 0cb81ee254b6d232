import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .conf import get_setting
from .dfa import DFA
from .examples import EXAMPLES, get_example
from .fsa_properties import check_all_properties, validate_fsa_structure
from .fsa_simulation import simulate_deterministic_fsa, simulate_nondeterministic_fsa
from .fsa_transformations import subset_construction
from .nfa import NFA
from .serialization import dfa_to_dict, fsa_from_dict

logger = logging.getLogger(__name__)


def _error(message: str, status: int = 400) -> JsonResponse:
    logger.warning("Rejected request: %s", message)
    return JsonResponse({'error': message}, status=status)


def _load_body(request) -> dict:
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


def _read_input(data: dict) -> str:
    """
    Extracts the input string from a request body.

    Raises:
        ValueError: If the input is not a string or is too long
    """
    input_string = data.get('input', '')
    if not isinstance(input_string, str):
        raise ValueError('input must be a string')
    max_length = get_setting('MAX_INPUT_LENGTH')
    if len(input_string) > max_length:
        raise ValueError(f'input is longer than {max_length} characters')
    return input_string


def _dfa_result(dfa: DFA, input_string: str) -> dict:
    result = simulate_deterministic_fsa(dfa, input_string)

    if isinstance(result, list):
        # Input was accepted - result is the execution path
        return {
            'accepted': True,
            'type': 'dfa',
            'path': result
        }
    return {
        'accepted': False,
        'type': 'dfa',
        'path': result.get('path', []),
        'rejection_reason': result.get('rejection_reason', 'Unknown rejection reason'),
        'rejection_position': result.get('rejection_position', 0)
    }


def _nfa_result(nfa: NFA, input_string: str) -> dict:
    result = simulate_nondeterministic_fsa(nfa, input_string)

    if isinstance(result, list):
        # Input was accepted - result is the list of active-state steps
        final_states = result[-1][2] if result else [nfa.start_state]
        return {
            'accepted': True,
            'type': 'nfa',
            'steps': result,
            'final_states': final_states
        }
    return {
        'accepted': False,
        'type': 'nfa',
        'steps': result.get('steps', []),
        'final_states': result.get('final_states', []),
        'rejection_reason': result.get('rejection_reason', 'Unknown rejection reason'),
        'rejection_position': result.get('rejection_position', 0)
    }


def _simulate(request, expected_type=None):
    try:
        # Parse the request body
        data = _load_body(request)
        fsa = data.get('fsa')

        if not fsa:
            return _error('Missing FSA definition')

        # Validate FSA structure
        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return _error(validation['error'])

        if expected_type and fsa['type'] != expected_type:
            return _error(f'Expected a {expected_type.upper()} definition, got {fsa["type"].upper()}')

        input_string = _read_input(data)
        automaton = fsa_from_dict(fsa)

        if isinstance(automaton, DFA):
            return JsonResponse(_dfa_result(automaton, input_string))
        return JsonResponse(_nfa_result(automaton, input_string))

    except ValueError as e:
        # json.JSONDecodeError and every automaton error are ValueErrors
        return _error(str(e))
    except Exception as e:
        logger.exception("FSA simulation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_fsa(request):
    """
    Django view to handle FSA simulation requests.
    Runs the DFA or NFA simulator according to the definition's type.

    Expects a POST request with a JSON body containing:
    - fsa: The FSA definition
    - input: The input string to simulate

    Returns a JSON response with simulation results.
    """
    return _simulate(request)


@csrf_exempt
@require_POST
def simulate_dfa(request):
    """
    Django view to handle DFA simulation requests specifically.
    """
    return _simulate(request, expected_type='dfa')


@csrf_exempt
@require_POST
def simulate_nfa(request):
    """
    Django view to handle NFA simulation requests specifically.
    """
    return _simulate(request, expected_type='nfa')


@csrf_exempt
@require_POST
def convert_nfa_to_dfa(request):
    """
    Django view to handle NFA to DFA conversion requests.

    Expects a POST request with a JSON body containing:
    - fsa: An NFA definition

    Returns a JSON response with the converted DFA, the NFA states behind
    each DFA state, and statistics about both automata.
    """
    try:
        data = _load_body(request)
        fsa = data.get('fsa')

        if not fsa:
            return _error('Missing FSA definition')

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return _error(validation['error'])

        if fsa['type'] != 'nfa':
            return _error('Conversion requires an NFA definition')

        nfa = fsa_from_dict(fsa)
        construction = subset_construction(nfa, max_states=get_setting('MAX_DFA_STATES'))
        converted_dfa = construction.dfa

        original_stats = {
            'states_count': nfa.num_states,
            'accepting_states_count': len(nfa.accepting_states()),
        }
        converted_stats = check_all_properties(converted_dfa)

        return JsonResponse({
            'success': True,
            'original_fsa': fsa,
            'converted_dfa': dfa_to_dict(converted_dfa),
            'subsets': [subset.to_list() for subset in construction.subsets],
            'statistics': {
                'original': original_stats,
                'converted': converted_stats,
                'conversion': {
                    'states_added': converted_stats['states_count'] - original_stats['states_count'],
                },
            },
            'message': 'NFA successfully converted to DFA'
        })

    except ValueError as e:
        return _error(str(e))
    except Exception as e:
        logger.exception("NFA to DFA conversion failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@require_GET
def list_examples(request):
    """Lists the built-in example automata."""
    return JsonResponse({
        'examples': [
            {
                'name': example.name,
                'type': example.kind,
                'description': example.description,
            }
            for example in EXAMPLES
        ]
    })


@csrf_exempt
@require_POST
def execute_example(request, name):
    """
    Runs a built-in example automaton on an input string.

    Expects a POST request with a JSON body containing:
    - input: The input string
    - convert: Optional boolean; NFA examples are converted to a DFA first

    Built-in examples are converted without the MAX_DFA_STATES limit: the
    largest of them needs 14580 DFA states.
    """
    try:
        example = get_example(name)
    except KeyError:
        return _error(f'Unknown example: {name}', status=404)

    try:
        data = _load_body(request) if request.body else {}
        input_string = _read_input(data)
        convert = data.get('convert', False)
        if not isinstance(convert, bool):
            raise ValueError('convert must be a boolean')

        automaton = example.build()
        if convert and isinstance(automaton, NFA):
            automaton = subset_construction(automaton).dfa

        return JsonResponse({
            'name': example.name,
            'description': example.description,
            'input': input_string,
            'converted': convert and example.kind == 'nfa',
            'accepted': automaton.execute(input_string),
        })

    except ValueError as e:
        return _error(str(e))
    except Exception as e:
        logger.exception("Running example %s failed", name)
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)
