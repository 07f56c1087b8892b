import pytest
import forth79
from forth79.dictionary import Dictionary, flatten


def define(d, text):
    d.define(forth79.tokenize(text))


class TestDictionary():
    def test_add_word(self):
        d = Dictionary()
        define(d, ': A 1 ;')

        assert 'A' in d
        assert d['A'] == ['1']

    def test_bodies_stay_symbolic(self):
        d = Dictionary()
        define(d, ': A 1 ;')
        define(d, ': B A A ;')

        assert d['B'] == ['A', 'A']

    def test_redefine_word(self):
        d = Dictionary()
        define(d, ': A 1 ;')
        define(d, ': A 2 ;')

        assert d['A'] == ['2']

    def test_redefinition_freezes_callers(self):
        d = Dictionary()
        define(d, ': FOO 5 ;')
        define(d, ': BAR FOO ;')
        define(d, ': FOO 6 ;')

        assert d['BAR'] == ['5']
        assert d['FOO'] == ['6']

    def test_freezing_is_one_level_deep(self):
        d = Dictionary()
        define(d, ': FOO 5 ;')
        define(d, ': BAR FOO ;')
        define(d, ': BAZ BAR ;')
        define(d, ': FOO 6 ;')

        assert d['BAR'] == ['5']
        assert d['BAZ'] == ['FOO']

    def test_self_reference(self):
        d = Dictionary()
        define(d, ': FOO 10 ;')
        define(d, ': FOO FOO 1 + ;')

        assert d['FOO'] == ['10', '1', '+']

    def test_self_reference_of_new_word(self):
        d = Dictionary()
        define(d, ': FOO FOO 1 ;')

        assert d['FOO'] == ['1']

    def test_number_name(self):
        d = Dictionary()

        with pytest.raises(forth79.InvalidWord):
            define(d, ': 1 2 ;')
        with pytest.raises(forth79.InvalidWord):
            define(d, ': -1 2 ;')
        assert len(d) == 0

    def test_out_of_range_number_is_a_name(self):
        d = Dictionary()
        define(d, ': 99999 1 ;')

        assert d['99999'] == ['1']

    def test_missing_name(self):
        d = Dictionary()

        with pytest.raises(forth79.InvalidWord):
            define(d, ': ;')

    def test_empty_body(self):
        d = Dictionary()
        define(d, ': NOTHING ;')

        assert d['NOTHING'] == []

    def test_many_definitions_do_not_expand(self):
        d = Dictionary()
        define(d, ': WORD1 1 ;')
        for power in range(1, 28):
            define(d, ': WORD%d WORD%d WORD%d ;' % (2 ** power, 2 ** (power - 1), 2 ** (power - 1)))

        assert d['WORD134217728'] == ['WORD67108864', 'WORD67108864']
        assert not d.is_recursive('WORD134217728')

    def test_mutually_recursive(self):
        d = Dictionary()
        define(d, ': A B ;')
        define(d, ': B A ;')

        assert d.is_recursive('A')
        assert d.is_recursive('B')

    def test_leads_to_a_cycle(self):
        d = Dictionary()
        define(d, ': A 1 B ;')
        define(d, ': B C ;')
        define(d, ': C 2 B ;')
        define(d, ': D 3 ;')

        assert d.is_recursive('A')
        assert not d.is_recursive('D')

    def test_undefined_reference_is_not_recursive(self):
        d = Dictionary()
        define(d, ': A B ;')

        assert not d.is_recursive('A')

        define(d, ': B A ;')
        assert d.is_recursive('A')

    def test_self_reference_is_not_recursive(self):
        d = Dictionary()
        define(d, ': FOO FOO 1 ;')

        assert d['FOO'] == ['1']
        assert not d.is_recursive('FOO')


class TestFlatten():
    def test_one_level(self):
        words = {'A': ['1'], 'B': ['A', '2'], 'C': ['B', 'A']}

        assert flatten(words) == {'A': ['1'], 'B': ['1', '2'], 'C': ['A', '2', '1']}

    def test_leaves_original_alone(self):
        words = {'A': ['1'], 'B': ['A']}
        flatten(words)

        assert words == {'A': ['1'], 'B': ['A']}
