#!/usr/bin/env python3
"""
incremental.py - Character-at-a-time transformation buffer
Bộ đệm chuyển đổi theo từng ký tự

================================================================================
OVERVIEW / Tổng quan
================================================================================

An input method editor sees one key at a time and has to show the correct
text after every key. IncrementalBuffer keeps the syllable of the word being
typed and the text of the words already finished:

Trình gõ nhận từng phím một và phải hiển thị đúng sau mỗi phím:

    push('v')  → "v"
    push('i')  → "vi"
    push('e')  → "vie"
    push('e')  → "viê"
    push('t')  → "viêt"
    push('j')  → "việt"

After every push, view() equals transform() over everything pushed so far.

================================================================================
RE-PARSING / Phân tích lại
================================================================================

Most keystrokes only append to, or mark, the cached syllable. A few revise
letters they do not target: a horn spreading onto ươ when the final arrives,
an inserted ư turned back into w, a diacritic toggled off. For those the
buffer drops the cached syllable and re-derives the word from its raw
keystrokes:

    committed  "xin "          │  word raw "chuwon"
                               │
    cached     c h ư o   ─ n ─►  c h ư ơ n      letters before n changed
                               │      → parse_word("chuwon")

================================================================================
"""

import logging

from input_method import ActionKind, Keystroke, get_table, passthrough
from placement import get_accent_style, render
from syllable import EMPTY
from syllable_parser import apply, parse_word
from transform import TransformResult, is_word_char, merge_results, step_result

logger = logging.getLogger(__name__)


class IncrementalBuffer:
    """
    Buffer that turns keystrokes into Vietnamese text as they arrive.

    Args:
        method: InputMethod, method name or InputMethodTable
        accent_style: AccentStyle or its name
    """

    def __init__(self, method, accent_style):
        self._table = get_table(method)
        self._style = get_accent_style(accent_style)
        self.clear()

    def clear(self):
        """Forget everything pushed so far."""
        self._input = []
        self._committed = ''
        self._syllable = EMPTY
        self._result = TransformResult()
        self._last_keystroke = None

    def push(self, char):
        """
        Push one character.

        Returns:
            TransformResult describing what this keystroke removed
        """
        self._input.append(char)

        if not is_word_char(char):
            self._committed += render(self._syllable, self._style) + char
            self._syllable = EMPTY
            self._last_keystroke = Keystroke(char, passthrough(char))
            return TransformResult()

        before = self._syllable
        action = self._table.resolve(before, char)
        self._last_keystroke = Keystroke(char, action)
        after = apply(before, char, action)
        revised = after.letters[:len(before.letters)] != before.letters
        if revised and after.last_action.kind is not ActionKind.MODIFY_LETTER:
            logger.debug(f'Keystroke {char!r} revised {before.text()!r}, re-parsing {after.raw!r}')
            after = parse_word(self._table, after.raw)
        self._syllable = after

        result = step_result(before, after)
        self._result = merge_results(self._result, result)
        return result

    def view(self):
        """Return the text for everything pushed so far."""
        return self._committed + render(self._syllable, self._style)

    def last_keystroke(self):
        """Return the Keystroke for the latest push, None after clear()."""
        return self._last_keystroke

    def result(self):
        """Return the TransformResult accumulated since the last clear()."""
        return self._result

    def input(self):
        """Return the characters pushed so far."""
        return list(self._input)

    def is_empty(self):
        return not self._input

    def __len__(self):
        return len(self._input)

    def len(self):
        """Number of characters pushed so far; same as len(buffer)."""
        return len(self._input)
