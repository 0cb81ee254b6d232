import logging
import sys

from django.core.management.base import BaseCommand

from fsa_engine.dfa import DFA
from fsa_engine.examples import EXAMPLES, EXAMPLES_BY_NAME, get_example
from fsa_engine.exceptions import SymbolOutOfRangeError
from fsa_engine.fsa_transformations import subset_construction
from fsa_engine.table_printer import format_dfa_table, format_nfa_table, format_subsets

logger = logging.getLogger(__name__)

PROMPT = 'Enter an input ("quit" to quit): '
QUIT = 'quit'


class Command(BaseCommand):
    help = 'Reads strings from standard input and reports whether an example automaton accepts them.'
    stealth_options = ('stdin',)

    def add_arguments(self, parser):
        parser.add_argument(
            'name', nargs='?', choices=sorted(EXAMPLES_BY_NAME),
            help=(
                'Example automaton to run. When omitted, runs every example in turn, '
                'then every NFA example converted to a DFA.'
            ),
        )
        parser.add_argument(
            '--convert', action='store_true',
            help='Convert NFA examples to a DFA with subset construction before running them.',
        )
        parser.add_argument(
            '--show-table', action='store_true',
            help='Print the transition table before reading input.',
        )
        parser.add_argument(
            '--list', action='store_true', dest='list_examples',
            help='List the available examples and exit.',
        )

    def handle(self, *args, **options):
        # Tests pass their own stream, as with createsuperuser
        self.stdin = options.get('stdin', sys.stdin)

        if options['list_examples']:
            for example in EXAMPLES:
                self.stdout.write(f"{example.name:<28} {example.kind.upper()}  {example.description}")
            return

        for example, convert in self.plan(options['name'], options['convert']):
            if not self.run_example(example, convert, options['show_table']):
                break

    def plan(self, name, convert):
        """
        Lists the (example, convert) runs to make, in order.

        Without a name every example runs as built, then every NFA example
        runs again as its converted DFA. --convert converts NFAs on the first
        pass instead.
        """
        if name:
            return [(get_example(name), convert)]
        if convert:
            return [(example, True) for example in EXAMPLES]
        runs = [(example, False) for example in EXAMPLES]
        runs.extend((example, True) for example in EXAMPLES if example.kind == 'nfa')
        return runs

    def run_example(self, example, convert, show_table):
        """
        Runs one example until the user quits.

        Returns:
            bool: False once standard input is exhausted
        """
        automaton = example.build()
        description = example.description

        if convert and example.kind == 'nfa':
            construction = subset_construction(automaton)
            automaton = construction.dfa
            description = f"DFA converted from {description}"
            logger.info("Converted %s into a %d-state DFA", example.name, automaton.num_states)
            if show_table:
                self.stdout.write(format_subsets(construction.subsets))

        self.stdout.write(f"Testing {description}...")
        if show_table:
            if isinstance(automaton, DFA):
                self.stdout.write(format_dfa_table(automaton))
            else:
                self.stdout.write(format_nfa_table(automaton))

        return self.repl(automaton)

    def repl(self, automaton):
        while True:
            self.stdout.write(PROMPT, ending='')
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                self.stdout.write('')
                return False

            text = line.rstrip('\r\n')
            if text == QUIT:
                return True

            try:
                accepted = automaton.execute(text)
            except SymbolOutOfRangeError as e:
                self.stderr.write(f'Cannot run input "{text}": {e}')
                continue

            self.stdout.write(f'Result for input "{text}": {accepted}')
