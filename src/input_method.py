#!/usr/bin/env python3
"""
input_method.py - Key tables for the TELEX and VNI input methods
Bảng phím cho kiểu gõ TELEX và VNI

================================================================================
OVERVIEW / Tổng quan
================================================================================

An input method maps a key to an ordered list of candidate actions. When a
key arrives, the first candidate that makes sense for the syllable being
typed wins; if none does, the key is typed literally (PASSTHROUGH).

Kiểu gõ ánh xạ mỗi phím tới một danh sách hành động theo thứ tự ưu tiên.
Hành động đầu tiên áp dụng được cho âm tiết đang gõ sẽ được chọn.

    TELEX 'w'  →  [UNDO_HORN_U, MODIFY(HORN), MODIFY(BREVE), INSERT_HORN_U]

        "ww"    second w undoes the inserted ư        →  "w"
        "uw"    horn on u                             →  "ư"
        "aw"    no u/o to horn, breve on a            →  "ă"
        "tw"    no vowel yet, insert ư                →  "tư"

Keys that are not in the table at all are ordinary letters (INSERT_LETTER).

This module is the only place that knows which convention maps which key to
which action. Everything downstream works on actions alone.

================================================================================
TABLES / Bảng phím
================================================================================

    key   TELEX                     VNI
    ───   ───────────────────────   ──────────────
    s/1   sắc   (acute)             1  sắc
    f/2   huyền (grave)             2  huyền
    r/3   hỏi   (hook)              3  hỏi
    x/4   ngã   (tilde)             4  ngã
    j/5   nặng  (dot)               5  nặng
          aa ee oo  circumflex      6  circumflex
          w         horn / breve    7  horn, 8 breve
          dd        đ               9  đ
    z/0   remove tone               0  remove tone

================================================================================
CUSTOM DEFINITIONS / Định nghĩa tùy chỉnh
================================================================================

A table can also be built from a JSON definition (see data/methods/):

    {
      "name": "vni-z",
      "keys": {
        "1": ["tone:acute"],
        "6": ["modify:circumflex"],
        "z": ["undo_horn_u", "insert_horn_u"]
      }
    }

Action names: "tone:<level|acute|grave|hook|tilde|dot>",
"modify:<breve|circumflex|horn|stroke>", "modify:<diacritic>:<vowel>" (only
when the nucleus contains that vowel), "insert_horn_u", "undo_horn_u".

================================================================================
"""

import collections
import enum
import logging

from letters import Diacritic, Tone

logger = logging.getLogger(__name__)


class ActionKind(enum.Enum):
    INSERT_LETTER = 'insert_letter'
    MODIFY_LETTER = 'modify_letter'
    APPLY_TONE = 'apply_tone'
    INSERT_HORN_U = 'insert_horn_u'
    UNDO_HORN_U = 'undo_horn_u'
    PASSTHROUGH = 'passthrough'


# value: the letter for INSERT_LETTER/PASSTHROUGH/INSERT_HORN_U, the Diacritic
# for MODIFY_LETTER, the Tone for APPLY_TONE.
# family: for MODIFY_LETTER, only applicable when the nucleus holds this vowel.
Action = collections.namedtuple('Action', ['kind', 'value', 'family'], defaults=(None, None))

Keystroke = collections.namedtuple('Keystroke', ['char', 'action'])


def insert_letter(char):
    return Action(ActionKind.INSERT_LETTER, char)


def passthrough(char):
    return Action(ActionKind.PASSTHROUGH, char)


def modify(diacritic, family=None):
    return Action(ActionKind.MODIFY_LETTER, diacritic, family)


def tone(value):
    return Action(ActionKind.APPLY_TONE, value)


INSERT_HORN_U = Action(ActionKind.INSERT_HORN_U)
UNDO_HORN_U = Action(ActionKind.UNDO_HORN_U)


class InputMethodTable:
    """
    Ordered key → candidate-actions table.

    Args:
        name: Display name of the method
        keys: dict mapping a lowercase key to a sequence of Action candidates
    """

    def __init__(self, name, keys):
        self.name = name
        self._keys = {key.lower(): tuple(candidates) for key, candidates in keys.items()}

    def __repr__(self):
        return f'InputMethodTable({self.name!r}, {len(self._keys)} keys)'

    def __contains__(self, key):
        return key.lower() in self._keys

    def candidates(self, key):
        return self._keys.get(key.lower(), ())

    def resolve(self, syllable, key):
        """
        Resolve a key against the syllable currently being typed.

        Args:
            syllable: The pending syllable (see syllable.Syllable)
            key: A single input character

        Returns:
            The concrete Action for this keystroke
        """
        candidates = self.candidates(key)
        if not candidates:
            return insert_letter(key)
        for candidate in candidates:
            if _applicable(candidate, syllable):
                if candidate.kind is ActionKind.INSERT_HORN_U:
                    return candidate._replace(value='U' if key.isupper() else 'u')
                return candidate
        return passthrough(key)


def _applicable(action, syllable):
    kind = action.kind
    if kind is ActionKind.APPLY_TONE:
        if not syllable.nucleus:
            return False
        if action.value is Tone.LEVEL:
            return syllable.tone is not Tone.LEVEL
        return True
    if kind is ActionKind.MODIFY_LETTER:
        if action.family is not None and not syllable.nucleus_contains(action.family):
            return False
        return bool(syllable.modification_targets(action.value))
    if kind is ActionKind.INSERT_HORN_U:
        return not syllable.nucleus or syllable.base_text() == 'gi'
    if kind is ActionKind.UNDO_HORN_U:
        last = syllable.last_action
        return last is not None and last.kind is ActionKind.INSERT_HORN_U
    return True


def resolve(table, syllable, key):
    """Module-level shortcut for table.resolve(syllable, key)."""
    return table.resolve(syllable, key)


TELEX = InputMethodTable('telex', {
    's': [tone(Tone.ACUTE)],
    'f': [tone(Tone.GRAVE)],
    'r': [tone(Tone.HOOK)],
    'x': [tone(Tone.TILDE)],
    'j': [tone(Tone.DOT)],
    'z': [tone(Tone.LEVEL)],
    'a': [modify(Diacritic.CIRCUMFLEX, 'a')],
    'e': [modify(Diacritic.CIRCUMFLEX, 'e')],
    'o': [modify(Diacritic.CIRCUMFLEX, 'o')],
    'w': [UNDO_HORN_U, modify(Diacritic.HORN), modify(Diacritic.BREVE), INSERT_HORN_U],
    'd': [modify(Diacritic.STROKE)],
})

VNI = InputMethodTable('vni', {
    '1': [tone(Tone.ACUTE)],
    '2': [tone(Tone.GRAVE)],
    '3': [tone(Tone.HOOK)],
    '4': [tone(Tone.TILDE)],
    '5': [tone(Tone.DOT)],
    '0': [tone(Tone.LEVEL)],
    '6': [modify(Diacritic.CIRCUMFLEX)],
    '7': [modify(Diacritic.HORN)],
    '8': [modify(Diacritic.BREVE)],
    '9': [modify(Diacritic.STROKE)],
})


class InputMethod(enum.Enum):
    TELEX = 'telex'
    VNI = 'vni'

    @property
    def table(self):
        return TELEX if self is InputMethod.TELEX else VNI


def get_table(method):
    """
    Accept an InputMethod, a built-in method name or a ready table.

    Raises:
        ValueError: for an unknown method name
    """
    if isinstance(method, InputMethodTable):
        return method
    if isinstance(method, InputMethod):
        return method.table
    try:
        return InputMethod(str(method).lower()).table
    except ValueError:
        raise ValueError(f'Unknown input method: {method!r}') from None


def _parse_action(entry):
    parts = entry.split(':')
    head = parts[0]
    if head == 'insert_horn_u' and len(parts) == 1:
        return INSERT_HORN_U
    if head == 'undo_horn_u' and len(parts) == 1:
        return UNDO_HORN_U
    if head == 'tone' and len(parts) == 2:
        return tone(Tone(parts[1]))
    if head == 'modify' and len(parts) in (2, 3):
        family = parts[2] if len(parts) == 3 else None
        return modify(Diacritic(parts[1]), family)
    raise ValueError(entry)


def table_from_definition(data):
    """
    Build an InputMethodTable from a parsed JSON definition.

    Args:
        data: dict with "name" and "keys" (key -> list of action names)

    Raises:
        ValueError: when the definition is malformed, naming the offending key
    """
    if not isinstance(data, dict) or not isinstance(data.get('keys'), dict):
        raise ValueError('Input method definition must be an object with a "keys" object')
    keys = {}
    for key, entries in data['keys'].items():
        if len(key) != 1:
            raise ValueError(f'Key {key!r} must be a single character')
        if isinstance(entries, str):
            entries = [entries]
        try:
            keys[key] = [_parse_action(entry) for entry in entries]
        except (ValueError, AttributeError, TypeError):
            raise ValueError(f'Invalid action list for key {key!r}: {entries!r}') from None
    table = InputMethodTable(data.get('name', 'custom'), keys)
    logger.debug(f'Built input method table {table!r}')
    return table
