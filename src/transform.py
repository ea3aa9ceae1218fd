#!/usr/bin/env python3
"""
transform.py - Batch transformation of keystroke text into Vietnamese
Chuyển cả chuỗi phím gõ thành tiếng Việt

================================================================================
OVERVIEW / Tổng quan
================================================================================

    transform(InputMethod.TELEX, AccentStyle.NEW, "tieengs Vieetj")
        → "tiếng Việt"

The input is split into words (runs of letters and digits) and separators
(everything else). Separators are copied verbatim; each word is parsed
keystroke by keystroke into one syllable and rendered:

    "xin chaof!"
      │
      ├── "xin"    → parse_word → render → "xin"
      ├── " "      → copied
      ├── "chaof"  → parse_word → render → "chào"
      └── "!"      → copied

Digits belong to words so that VNI tone keys stay with their syllable
("viet65" is one word).

================================================================================
"""

import collections
import logging

from input_method import get_table
from letters import Tone
from placement import get_accent_style, render
from syllable import EMPTY
from syllable_parser import feed

logger = logging.getLogger(__name__)


# Flags raised while a word was being typed.
TransformResult = collections.namedtuple(
    'TransformResult',
    ['tone_mark_removed', 'letter_modification_removed'],
    defaults=(False, False),
)


def is_word_char(char):
    return char.isalnum()


def merge_results(first, second):
    return TransformResult(
        first.tone_mark_removed or second.tone_mark_removed,
        first.letter_modification_removed or second.letter_modification_removed,
    )


def step_result(before, after):
    """Describe what one keystroke removed from the syllable."""
    return TransformResult(
        tone_mark_removed=before.tone is not Tone.LEVEL and after.tone is Tone.LEVEL,
        letter_modification_removed=after.diacritic_count() < before.diacritic_count(),
    )


def split_words(text):
    """
    Split text into (is_word, chunk) pieces.

    Example:
        split_words("chao ban!") → [(True, 'chao'), (False, ' '),
                                    (True, 'ban'), (False, '!')]
    """
    pieces = []
    current = []
    current_is_word = None
    for char in text:
        word = is_word_char(char)
        if current and word != current_is_word:
            pieces.append((current_is_word, ''.join(current)))
            current = []
        current.append(char)
        current_is_word = word
    if current:
        pieces.append((current_is_word, ''.join(current)))
    return pieces


def transform_word(method, accent_style, word):
    """
    Transform a single word.

    Returns:
        tuple: (text, TransformResult)
    """
    table = get_table(method)
    style = get_accent_style(accent_style)
    syllable = EMPTY
    result = TransformResult()
    for key in word:
        next_syllable = feed(table, syllable, key)
        result = merge_results(result, step_result(syllable, next_syllable))
        syllable = next_syllable
    return render(syllable, style), result


def transform(method, accent_style, text):
    """
    Transform a whole string of keystrokes.

    Args:
        method: InputMethod, its name ("telex"/"vni") or an InputMethodTable
        accent_style: AccentStyle or its name ("old"/"new")
        text: The typed characters

    Returns:
        The Vietnamese text
    """
    table = get_table(method)
    style = get_accent_style(accent_style)
    output = []
    for is_word, chunk in split_words(text):
        if is_word:
            output.append(transform_word(table, style, chunk)[0])
        else:
            output.append(chunk)
    return ''.join(output)
