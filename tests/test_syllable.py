#!/usr/bin/env python3
# tests/test_syllable.py - Unit tests for syllable.py

import pytest
import os
import sys

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from letters import Diacritic, Tone
from syllable import EMPTY, Letter, Syllable, base_string


def make(text, tone=Tone.LEVEL):
    """Build a syllable of plain letters"""
    return Syllable(tuple(Letter(c) for c in text), tone=tone, raw=text)


def parts(syllable):
    return tuple(base_string(p) for p in (syllable.initial, syllable.nucleus, syllable.final))


class TestStructure:
    """Test suite for the initial / nucleus / final split"""

    @pytest.mark.parametrize('text, expected', [
        ('chuong', ('ch', 'uo', 'ng')),
        ('nghieng', ('ngh', 'ie', 'ng')),
        ('a', ('', 'a', '')),
        ('anh', ('', 'a', 'nh')),
        ('gia', ('gi', 'a', '')),
        ('gin', ('g', 'i', 'n')),
        ('gi', ('g', 'i', '')),
        ('quy', ('qu', 'y', '')),
        ('khuya', ('kh', 'uya', '')),
        ('bcd', ('bcd', '', '')),
    ])
    def test_split(self, text, expected):
        """Test that structure is derived from the letters"""
        assert parts(make(text)) == expected

    def test_case_is_ignored_for_structure(self):
        """Test that uppercase letters split the same way"""
        assert parts(make('GIA')) == ('gi', 'a', '')

    def test_empty(self):
        """Test the empty syllable"""
        assert EMPTY.is_empty()
        assert parts(EMPTY) == ('', '', '')
        assert EMPTY.tone is Tone.LEVEL

    def test_nucleus_contains(self):
        """Test vowel membership of the nucleus only"""
        syllable = make('hoan')
        assert syllable.nucleus_contains('a')
        assert not syllable.nucleus_contains('n')


class TestModificationTargets:
    """Test suite for modification_targets()"""

    def test_circumflex_single_candidate(self):
        """Test that the circumflex lands on the only a/e/o"""
        assert make('viet').modification_targets(Diacritic.CIRCUMFLEX) == [2]
        assert make('to').modification_targets(Diacritic.CIRCUMFLEX) == [1]

    def test_circumflex_ambiguous(self):
        """Test that two candidates for the circumflex give no target"""
        assert make('hoa').modification_targets(Diacritic.CIRCUMFLEX) == []

    def test_breve_first_a(self):
        """Test that the breve goes on the first a"""
        assert make('hoa').modification_targets(Diacritic.BREVE) == [2]
        assert make('to').modification_targets(Diacritic.BREVE) == []

    @pytest.mark.parametrize('text, expected', [
        ('thuo', [3]),
        ('chuong', [2, 3]),
        ('uo', [0, 1]),
        ('nguoi', [2, 3]),
        ('hoa', []),
        ('mua', [1]),
        ('to', [1]),
        ('ba', []),
    ])
    def test_horn(self, text, expected):
        """Test the ư/ơ pairing rules for the horn"""
        assert make(text).modification_targets(Diacritic.HORN) == expected

    def test_stroke(self):
        """Test that the stroke only targets a leading d"""
        assert make('da').modification_targets(Diacritic.STROKE) == [0]
        assert make('Da').modification_targets(Diacritic.STROKE) == [0]
        assert make('ad').modification_targets(Diacritic.STROKE) == []


class TestDerivedValues:
    """Test suite for the copy-on-change helpers"""

    def test_with_diacritic_leaves_receiver_unchanged(self):
        """Test that adding a diacritic returns a new syllable"""
        syllable = make('to')
        modified = syllable.with_diacritic([1], Diacritic.CIRCUMFLEX)

        assert modified.text() == 'tô'
        assert syllable.text() == 'to'

    def test_with_diacritic_skips_letters_that_cannot_carry_it(self):
        """Test that inadmissible letters are left alone"""
        assert make('ti').with_diacritic([1], Diacritic.HORN).text() == 'ti'

    def test_without_diacritic(self):
        """Test removing a diacritic from every letter"""
        syllable = make('chuong').with_diacritic([2, 3], Diacritic.HORN)

        assert syllable.text() == 'chương'
        assert syllable.diacritic_count() == 2
        assert syllable.without_diacritic(Diacritic.HORN).text() == 'chuong'


class TestIsValid:
    """Test suite for is_valid()"""

    @pytest.mark.parametrize('text', ['viet', 'chuong', 'nghieng', 'khuya', 'gi', 'quy', 'a', 'hoai'])
    def test_vietnamese(self, text):
        """Test that Vietnamese spellings are valid"""
        assert make(text).is_valid()

    @pytest.mark.parametrize('text', ['hello', 'xyz', 'blo', 'hoaa', 'cax'])
    def test_not_vietnamese(self, text):
        """Test that non-Vietnamese spellings are rejected"""
        assert not make(text).is_valid()

    def test_no_nucleus_is_still_being_typed(self):
        """Test that a syllable without vowels is accepted"""
        assert make('ngh').is_valid()
        assert make('bcd').is_valid()
