from django.test import TestCase
from fsa_engine.dfa import DFA
from fsa_engine.examples import dfa_for_starts_with_com, nfa_for_ends_with_gs
from fsa_engine.fsa_simulation import is_accepted, simulate_deterministic_fsa, simulate_nondeterministic_fsa
from fsa_engine.nfa import NFA


class TestFsaSimulation(TestCase):
    def test_basic_deterministic_fsa(self):
        dfa = dfa_for_starts_with_com()

        # Test accepted strings with their expected paths
        expected_path = [(0, 'c', 1), (1, 'o', 2), (2, 'm', 3)]
        self.assertEqual(simulate_deterministic_fsa(dfa, 'com'), expected_path)

        expected_path = [(0, 'c', 1), (1, 'o', 2), (2, 'm', 3), (3, 'a', 3)]
        self.assertEqual(simulate_deterministic_fsa(dfa, 'coma'), expected_path)

    def test_deterministic_rejection_on_final_state(self):
        dfa = dfa_for_starts_with_com()
        result = simulate_deterministic_fsa(dfa, 'co')

        self.assertFalse(result['accepted'])
        self.assertEqual(result['path'], [(0, 'c', 1), (1, 'o', 2)])
        self.assertEqual(result['rejection_position'], 2)
        self.assertIn('not an accepting state', result['rejection_reason'])

    def test_deterministic_empty_string(self):
        dfa = DFA(1)
        dfa.set_accepting(0, True)
        self.assertEqual(simulate_deterministic_fsa(dfa, ''), [])

        result = simulate_deterministic_fsa(dfa_for_starts_with_com(), '')
        self.assertFalse(result['accepted'])
        self.assertEqual(result['rejection_position'], 0)

    def test_deterministic_undefined_transition(self):
        dfa = DFA(2)
        dfa.set_transition(0, 'a', 1)
        dfa.set_accepting(1, True)

        result = simulate_deterministic_fsa(dfa, 'ab')
        self.assertFalse(result['accepted'])
        self.assertEqual(result['path'], [(0, 'a', 1)])
        self.assertEqual(result['rejection_position'], 1)
        self.assertIn('No transition defined', result['rejection_reason'])

    def test_deterministic_symbol_outside_alphabet(self):
        result = simulate_deterministic_fsa(dfa_for_starts_with_com(), 'coñ')

        self.assertFalse(result['accepted'])
        self.assertEqual(result['rejection_position'], 2)
        self.assertIn('not in alphabet', result['rejection_reason'])

    def test_nondeterministic_accepted_steps(self):
        nfa = nfa_for_ends_with_gs()
        result = simulate_nondeterministic_fsa(nfa, 'ags')

        self.assertTrue(is_accepted(result))
        self.assertEqual(result, [
            ([0], 'a', [0]),
            ([0], 'g', [0, 1]),
            ([0, 1], 's', [0, 2]),
        ])

    def test_nondeterministic_rejected(self):
        result = simulate_nondeterministic_fsa(nfa_for_ends_with_gs(), 'flag')

        self.assertFalse(is_accepted(result))
        self.assertEqual(len(result['steps']), 4)
        self.assertEqual(result['final_states'], [0, 1])
        self.assertEqual(result['rejection_position'], 4)

    def test_nondeterministic_no_active_states(self):
        nfa = NFA(2)
        nfa.add_transition(0, 'a', 1)
        nfa.set_accepting(1, True)

        result = simulate_nondeterministic_fsa(nfa, 'abab')
        self.assertFalse(result['accepted'])
        self.assertEqual(result['final_states'], [])
        self.assertEqual(result['rejection_position'], 1)
        self.assertEqual(result['steps'], [([0], 'a', [1]), ([1], 'b', [])])

    def test_nondeterministic_symbol_outside_alphabet(self):
        result = simulate_nondeterministic_fsa(nfa_for_ends_with_gs(), 'gü')

        self.assertFalse(result['accepted'])
        self.assertEqual(result['rejection_position'], 1)
        self.assertEqual(result['final_states'], [0, 1])

    def test_simulators_agree_with_execute(self):
        nfa = nfa_for_ends_with_gs()
        dfa = dfa_for_starts_with_com()
        for test_string in ['', 'gs', 'flags', 'com', 'comgs', 'xcom', 'g']:
            self.assertEqual(is_accepted(simulate_nondeterministic_fsa(nfa, test_string)),
                             nfa.execute(test_string))
            self.assertEqual(is_accepted(simulate_deterministic_fsa(dfa, test_string)),
                             dfa.execute(test_string))
