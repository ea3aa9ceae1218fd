#!/usr/bin/env python3
# tests/test_placement.py - Unit tests for placement.py

import pytest
import os
import sys

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from input_method import TELEX
from placement import AccentStyle, get_accent_style, render, tone_position
from syllable import EMPTY
from syllable_parser import parse_word


def typed(keys, style):
    return render(parse_word(TELEX, keys), style)


class TestStyleDivergence:
    """Test suite for words where old and new style differ"""

    @pytest.mark.parametrize('keys, old, new', [
        ('hoas', 'hóa', 'hoá'),
        ('thuyr', 'thủy', 'thuỷ'),
        ('hoef', 'hòe', 'hoè'),
    ])
    def test_open_clusters(self, keys, old, new):
        """Test that open oa/oe/uy clusters follow the accent style"""
        assert typed(keys, AccentStyle.OLD) == old
        assert typed(keys, AccentStyle.NEW) == new


class TestSharedRules:
    """Test suite for rules that do not depend on the style"""

    @pytest.mark.parametrize('keys, expected', [
        ('mas', 'má'),
        ('muaf', 'mùa'),
        ('hoangf', 'hoàng'),
        ('nguwowif', 'người'),
        ('toois', 'tối'),
        ('cuwar', 'cửa'),
        ('khuyru', 'khuỷu'),
        ('tieengs', 'tiếng'),
        ('gif', 'gì'),
        ('quys', 'quý'),
        ('hoawcj', 'hoặc'),
    ])
    def test_placement(self, keys, expected):
        """Test tone placement in both styles"""
        assert typed(keys, AccentStyle.OLD) == expected
        assert typed(keys, AccentStyle.NEW) == expected

    def test_mark_moves_when_final_arrives(self):
        """Test that the tone is re-placed after later keystrokes"""
        assert typed('hoas', AccentStyle.OLD) == 'hóa'
        assert typed('hoasn', AccentStyle.OLD) == 'hoán'


class TestTonePosition:
    """Test suite for tone_position()"""

    def test_no_nucleus(self):
        """Test that a syllable without vowels has no tone position"""
        assert tone_position(EMPTY) is None
        assert tone_position(parse_word(TELEX, 'ng')) is None

    def test_index_into_letters(self):
        """Test that the position indexes the full letter sequence"""
        syllable = parse_word(TELEX, 'nguwowif')
        assert tone_position(syllable) == 3


class TestRender:
    """Test suite for render()"""

    def test_empty_nucleus_keeps_letters(self):
        """Test that consonant-only syllables render their letters"""
        assert render(parse_word(TELEX, 'dd')) == 'đ'
        assert render(EMPTY) == ''

    def test_case_is_preserved(self):
        """Test rendering of uppercase input"""
        assert render(parse_word(TELEX, 'VIEETJ')) == 'VIỆT'
        assert render(parse_word(TELEX, 'Dduwowngf')) == 'Đường'

    def test_default_style_is_new(self):
        """Test that render() defaults to the new style"""
        assert render(parse_word(TELEX, 'hoas')) == 'hoá'


class TestGetAccentStyle:
    """Test suite for get_accent_style()"""

    def test_names(self):
        """Test that names are accepted case-insensitively"""
        assert get_accent_style('old') is AccentStyle.OLD
        assert get_accent_style('NEW') is AccentStyle.NEW
        assert get_accent_style(AccentStyle.OLD) is AccentStyle.OLD

    def test_unknown(self):
        """Test that unknown styles raise ValueError"""
        with pytest.raises(ValueError):
            get_accent_style('modern')
