from django.conf import settings

DEFAULTS = {
    # Longest input string accepted by the HTTP endpoints
    'MAX_INPUT_LENGTH': 10000,
    # Subset construction stops with an error past this many DFA states
    'MAX_DFA_STATES': 4096,
}


def get_setting(name: str):
    """
    Reads an app setting from the FSA_ENGINE dict in Django settings,
    falling back to the default.
    """
    overrides = getattr(settings, 'FSA_ENGINE', {})
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
