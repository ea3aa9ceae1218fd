#!/usr/bin/env python3
# tests/test_syllable_parser.py - Unit tests for syllable_parser.py

import pytest
import os
import sys

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from input_method import ActionKind, TELEX, VNI, insert_letter, tone
from letters import Diacritic, Tone
from placement import render
from syllable import EMPTY
from syllable_parser import apply, feed, parse_word


def typed(keys, table=TELEX):
    return render(parse_word(table, keys))


class TestApply:
    """Test suite for apply()"""

    def test_apply_returns_new_value(self):
        """Test that apply never changes the syllable it is given"""
        syllable = parse_word(TELEX, 'ba')
        toned = apply(syllable, 's', tone(Tone.ACUTE))

        assert toned.tone is Tone.ACUTE
        assert syllable.tone is Tone.LEVEL
        assert syllable.raw == 'ba'
        assert toned.raw == 'bas'

    def test_insert_letter(self):
        """Test that INSERT_LETTER appends the letter"""
        syllable = apply(EMPTY, 'b', insert_letter('b'))

        assert syllable.text() == 'b'
        assert syllable.last_action.kind is ActionKind.INSERT_LETTER

    def test_feed_resolves_then_applies(self):
        """Test that feed() uses the table to pick the action"""
        syllable = feed(TELEX, parse_word(TELEX, 'ca'), 'a')

        assert syllable.text() == 'câ'
        assert syllable.last_action.value is Diacritic.CIRCUMFLEX

    def test_raw_keeps_every_keystroke(self):
        """Test that raw holds the keys including consumed ones"""
        assert parse_word(TELEX, 'vieetj').raw == 'vieetj'


class TestModifications:
    """Test suite for letter modifications"""

    @pytest.mark.parametrize('keys, expected', [
        ('aa', 'â'),
        ('oo', 'ô'),
        ('ee', 'ê'),
        ('aw', 'ă'),
        ('uw', 'ư'),
        ('ow', 'ơ'),
        ('dd', 'đ'),
        ('w', 'ư'),
        ('tw', 'tư'),
        ('giw', 'giư'),
    ])
    def test_single_modification(self, keys, expected):
        """Test the basic TELEX modifications"""
        assert typed(keys) == expected

    @pytest.mark.parametrize('keys, expected', [
        ('aaa', 'aa'),
        ('ooo', 'oo'),
        ('aww', 'aw'),
        ('uww', 'uw'),
        ('ddd', 'dd'),
        ('ww', 'w'),
    ])
    def test_repeated_key_toggles(self, keys, expected):
        """Test that pressing a modification key again types it literally"""
        assert typed(keys) == expected

    def test_switch_between_diacritics(self):
        """Test that a different diacritic replaces the previous one"""
        assert typed('oow') == 'ơ'
        assert typed('awa') == 'â'

    def test_modification_after_final(self):
        """Test that a modification key still reaches the nucleus after the final"""
        assert typed('viete') == 'viêt'
        assert typed('nghienge') == 'nghiêng'

    def test_stroke_after_vowel(self):
        """Test that d later in the word still strokes the leading d"""
        assert typed('did') == 'đi'


class TestHornRetargeting:
    """Test suite for the ươ horn pairing"""

    def test_single_horn_without_final(self):
        """Test that uo after an initial keeps one horn until a final arrives"""
        assert parse_word(TELEX, 'chuwo').text() == 'chưo'
        assert parse_word(TELEX, 'thuow').text() == 'thuơ'

    def test_final_spreads_horn(self):
        """Test that a final consonant turns ưo/uơ into ươ"""
        assert parse_word(TELEX, 'chuwon').text() == 'chươn'
        assert parse_word(TELEX, 'duowc').text() == 'dươc'

    def test_third_vowel_spreads_horn(self):
        """Test that uoi gets the horn on both vowels"""
        assert parse_word(TELEX, 'nguwoi').text() == 'ngươi'

    def test_late_w_keeps_complete_horn(self):
        """Test that w after ươ is already complete changes nothing"""
        syllable = parse_word(TELEX, 'chuwongw')

        assert syllable.text() == 'chương'
        assert syllable.raw == 'chuwongw'


class TestTones:
    """Test suite for tones"""

    def test_tone_toggle(self):
        """Test that the same tone key twice restores the unmarked tone"""
        syllable = parse_word(TELEX, 'ass')

        assert syllable.tone is Tone.LEVEL
        assert render(syllable) == 'as'

    def test_tone_replaced(self):
        """Test that a different tone key replaces the tone"""
        syllable = parse_word(TELEX, 'asf')

        assert syllable.tone is Tone.GRAVE
        assert render(syllable) == 'à'

    def test_remove_tone(self):
        """Test that z and 0 clear the tone"""
        assert typed('asz') == 'a'
        assert typed('a10', VNI) == 'a'

    def test_tone_before_final(self):
        """Test that the tone can be typed before the final consonant"""
        assert typed('tieesng') == 'tiếng'


class TestDegradation:
    """Test suite for keystrokes that cannot form Vietnamese"""

    @pytest.mark.parametrize('keys', ['hello', 'hellos', 'xyz', 'bcdfg', 'dead'])
    def test_literal(self, keys):
        """Test that non-Vietnamese input stays literal"""
        assert typed(keys) == keys

    def test_rolled_back_key_is_passthrough(self):
        """Test that a rolled back tone is recorded as passthrough"""
        syllable = parse_word(TELEX, 'hellos')

        assert syllable.tone is Tone.LEVEL
        assert syllable.last_action.kind is ActionKind.PASSTHROUGH


class TestPrecomposedInput:
    """Test suite for text that already carries marks"""

    def test_toned_text_is_kept(self):
        """Test that already toned words come back unchanged"""
        assert typed('việt') == 'việt'
        assert typed('hòa') == 'hòa'

    def test_diacritic_letter_takes_tone(self):
        """Test that a typed ê behaves like ee"""
        assert typed('tiêns') == 'tiến'
