from itertools import product

from django.test import TestCase
from fsa_engine.dfa import UNDEFINED
from fsa_engine.examples import (
    nfa_for_contains_mas,
    nfa_for_ends_with_gs,
    nfa_for_not_anagram_of_codebreaker,
)
from fsa_engine.exceptions import StateExplosionError
from fsa_engine.fsa_properties import is_dead_state, is_total, reachable_states
from fsa_engine.fsa_transformations import nfa_to_dfa, subset_construction
from fsa_engine.nfa import NFA
from fsa_engine.state_set import StateSet


def all_strings(alphabet, max_length):
    for length in range(max_length + 1):
        for symbols in product(alphabet, repeat=length):
            yield ''.join(symbols)


def third_from_last_is_a() -> NFA:
    """NFA whose DFA needs every subset of its last three states"""
    nfa = NFA(4)
    nfa.add_transition_for_all_symbols(0, 0)
    nfa.add_transition(0, 'a', 1)
    nfa.add_transition_for_all_symbols(1, 2)
    nfa.add_transition_for_all_symbols(2, 3)
    nfa.set_accepting(3, True)
    return nfa


class TestNfaToDfa(TestCase):
    """Test cases for the subset construction"""

    def assertSameLanguage(self, nfa, dfa, alphabet, max_length):
        for test_string in all_strings(alphabet, max_length):
            self.assertEqual(nfa.execute(test_string), dfa.execute(test_string),
                             f"Disagreement on string '{test_string}'")

    def test_ends_with_gs_scenarios(self):
        dfa = nfa_to_dfa(nfa_for_ends_with_gs())

        self.assertTrue(dfa.execute('flags'))
        self.assertFalse(dfa.execute('flag'))
        self.assertTrue(dfa.execute('gs'))
        self.assertFalse(dfa.execute(''))

    def test_ends_with_gs_equivalence(self):
        nfa = nfa_for_ends_with_gs()
        self.assertSameLanguage(nfa, nfa_to_dfa(nfa), 'gsx', 6)

    def test_contains_mas_equivalence(self):
        nfa = nfa_for_contains_mas()
        self.assertSameLanguage(nfa, nfa_to_dfa(nfa), 'masx', 5)

    def test_third_from_last_equivalence(self):
        nfa = third_from_last_is_a()
        dfa = nfa_to_dfa(nfa)

        self.assertEqual(dfa.num_states, 8)
        self.assertSameLanguage(nfa, dfa, 'ab', 7)

    def test_start_state_is_first_subset(self):
        construction = subset_construction(nfa_for_ends_with_gs())

        self.assertEqual(construction.dfa.start_state, 0)
        self.assertEqual(construction.subset_for(0), StateSet.of(0))

    def test_nfa_start_state_is_respected(self):
        nfa = NFA(3, start_state=2)
        nfa.add_transition(2, 'a', 0)
        nfa.add_transition(0, 'b', 1)
        nfa.set_accepting(1, True)

        construction = subset_construction(nfa)
        self.assertEqual(construction.subset_for(0), StateSet.of(2))
        self.assertSameLanguage(nfa, construction.dfa, 'ab', 4)

    def test_only_reachable_subsets_are_created(self):
        """Ends-with-gs needs {0}, {0,1} and {0,2}, not all 8 subsets"""
        construction = subset_construction(nfa_for_ends_with_gs())

        self.assertEqual(construction.dfa.num_states, 3)
        self.assertEqual(
            sorted(subset.to_list() for subset in construction.subsets),
            [[0], [0, 1], [0, 2]]
        )

    def test_discovered_subsets_are_unique(self):
        construction = subset_construction(third_from_last_is_a())
        keys = [subset.key for subset in construction.subsets]

        self.assertEqual(len(keys), len(set(keys)))
        for subset in construction.subsets:
            self.assertTrue(subset.is_frozen)

    def test_existing_subset_is_reused(self):
        nfa = nfa_for_ends_with_gs()
        construction = subset_construction(nfa)
        dfa = construction.dfa

        after_g = dfa.get_transition(0, 'g')
        # {0,1} on 'g' leads back to {0,1}
        self.assertEqual(dfa.get_transition(after_g, 'g'), after_g)
        self.assertEqual(construction.dfa_state_for(StateSet.of(0, 1)), after_g)

    def test_discovery_is_deterministic(self):
        first = subset_construction(third_from_last_is_a())
        second = subset_construction(third_from_last_is_a())

        self.assertEqual(first.subsets, second.subsets)
        for state in range(first.dfa.num_states):
            self.assertEqual(first.dfa.row(state), second.dfa.row(state))
        self.assertEqual(first.dfa.accepting_states(), second.dfa.accepting_states())

    def test_accepting_flags_match_subsets(self):
        """Every DFA state is accepting exactly when its subset holds an accepting NFA state"""
        for nfa in (nfa_for_ends_with_gs(), nfa_for_contains_mas(), third_from_last_is_a()):
            construction = subset_construction(nfa)
            for index, subset in enumerate(construction.subsets):
                self.assertEqual(construction.dfa.is_accepting(index), nfa.contains_accepting(subset),
                                 f"Wrong accepting flag for DFA state {index} = {subset!r}")

    def test_produced_dfa_is_total(self):
        dfa = nfa_to_dfa(nfa_for_contains_mas())

        self.assertTrue(is_total(dfa))
        self.assertEqual(reachable_states(dfa), set(range(dfa.num_states)))
        for state in range(dfa.num_states):
            self.assertNotIn(UNDEFINED, dfa.row(state))

    def test_empty_subset_becomes_dead_state(self):
        nfa = NFA(2)
        nfa.add_transition(0, 'a', 1)
        nfa.set_accepting(1, True)

        construction = subset_construction(nfa)
        dead = construction.dfa_state_for(StateSet.empty())

        self.assertIsNotNone(dead)
        self.assertTrue(is_dead_state(construction.dfa, dead))
        self.assertTrue(construction.dfa.execute('a'))
        self.assertFalse(construction.dfa.execute('ab'))
        self.assertFalse(construction.dfa.execute('b'))

    def test_nfa_without_transitions(self):
        nfa = NFA(1)
        nfa.set_accepting(0, True)
        dfa = nfa_to_dfa(nfa)

        self.assertEqual(dfa.num_states, 2)
        self.assertTrue(dfa.execute(''))
        self.assertFalse(dfa.execute('a'))

    def test_state_limit(self):
        with self.assertRaises(StateExplosionError) as context:
            nfa_to_dfa(nfa_for_not_anagram_of_codebreaker(), max_states=50)
        self.assertEqual(context.exception.limit, 50)

        # A limit equal to the needed state count is fine
        self.assertEqual(nfa_to_dfa(nfa_for_ends_with_gs(), max_states=3).num_states, 3)

    def test_codebreaker_full_conversion(self):
        nfa = nfa_for_not_anagram_of_codebreaker()
        dfa = nfa_to_dfa(nfa)

        # One state per vector of capped letter counts: 3^6 (a b c d k o) * 5 (e) * 4 (r)
        self.assertEqual(dfa.num_states, 14580)
        self.assertTrue(is_total(dfa))

        test_strings = [
            '', 'codebreaker', 'codebreakerr', 'rekaerbedoc', 'breakcodeer',
            'oo', 'eeee', 'rrr', 'aa', 'code', 'xyz', 'codebreakers',
        ]
        for test_string in test_strings:
            self.assertEqual(dfa.execute(test_string), nfa.execute(test_string),
                             f"Disagreement on string '{test_string}'")
