#!/usr/bin/env python3
"""
capi.py - Handle-based entry points for embedding callers
Giao diện dạng handle cho chương trình nhúng

================================================================================
OVERVIEW / Tổng quan
================================================================================

Editors written in other languages talk to the engine through a small, fixed
set of calls that only exchange NUL-terminated UTF-8 strings and integer
handles. This module is that surface on the Python side:

    transform_string(b"tieengs Vieetj", TELEX, NEW)   → string (ctypes buffer)
    free_string(string)

    handle = incremental_buffer_create(TELEX, NEW)
    incremental_buffer_push(handle, b"a")
    incremental_buffer_view(handle)                   → string (ctypes buffer)
    incremental_buffer_destroy(handle)

Ownership rules are the same as for the native library:

    - every string returned here must be released once with free_string()
    - releasing twice, or releasing something that was not returned here,
      is logged and ignored
    - a missing (None) or non UTF-8 input gives None
    - a destroyed or unknown handle makes push a no-op and view return None

Method and style accept the enum members or the ordinals used by the C
header: Telex = 0, Vni = 1 and Old = 0, New = 1. An ordinal outside those
values is logged, and the call returns None.

================================================================================
"""

import ctypes
import itertools
import logging
import threading

from incremental import IncrementalBuffer
from input_method import InputMethod
from placement import AccentStyle
from transform import transform

logger = logging.getLogger(__name__)


METHOD_ORDINALS = (InputMethod.TELEX, InputMethod.VNI)
STYLE_ORDINALS = (AccentStyle.OLD, AccentStyle.NEW)

_lock = threading.Lock()
_strings = {}
_buffers = {}
_handle_ids = itertools.count(1)


def _from_ordinal(members, value, what):
    if not isinstance(value, int):
        return value
    if 0 <= value < len(members):
        return members[value]
    logger.warning(f'Unknown {what} ordinal {value}')
    return None


def _method(method):
    return _from_ordinal(METHOD_ORDINALS, method, 'input method')


def _style(style):
    return _from_ordinal(STYLE_ORDINALS, style, 'accent style')


def _decode(data):
    """Decode a NUL-terminated UTF-8 input; None when missing or invalid."""
    if data is None:
        return None
    if isinstance(data, ctypes.Array):
        data = data.value
    elif isinstance(data, str):
        return data
    data = bytes(data).split(b'\0', 1)[0]
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        logger.warning(f'Rejected input that is not valid UTF-8: {data!r}')
        return None


def _new_string(text):
    string = ctypes.create_string_buffer(text.encode('utf-8'))
    with _lock:
        _strings[ctypes.addressof(string)] = string
    return string


def transform_string(data, method, accent_style):
    """
    Transform a NUL-terminated UTF-8 string.

    Returns:
        ctypes char buffer holding the result, or None for invalid input
    """
    text = _decode(data)
    method = _method(method)
    accent_style = _style(accent_style)
    if text is None or method is None or accent_style is None:
        return None
    return _new_string(transform(method, accent_style, text))


def free_string(string):
    """Release a string returned by this module."""
    if string is None:
        return
    if not isinstance(string, ctypes.Array):
        logger.warning(f'free_string() called with {type(string).__name__}, expected a returned string')
        return
    with _lock:
        released = _strings.pop(ctypes.addressof(string), None)
    if released is None:
        logger.warning('free_string() called on a string that is not owned or already released')


def live_string_count():
    with _lock:
        return len(_strings)


def incremental_buffer_create(method, accent_style):
    """Create a buffer and return its handle (a positive integer), or None for unknown ordinals."""
    method = _method(method)
    accent_style = _style(accent_style)
    if method is None or accent_style is None:
        return None
    buffer = IncrementalBuffer(method, accent_style)
    with _lock:
        handle = next(_handle_ids)
        _buffers[handle] = buffer
    logger.debug(f'Created incremental buffer {handle}')
    return handle


def _buffer(handle):
    with _lock:
        return _buffers.get(handle)


def incremental_buffer_push(handle, data):
    """Push every character of a UTF-8 input; no-op on a bad handle or input."""
    buffer = _buffer(handle)
    text = _decode(data)
    if buffer is None or text is None:
        return
    for char in text:
        buffer.push(char)


def incremental_buffer_view(handle):
    buffer = _buffer(handle)
    if buffer is None:
        return None
    return _new_string(buffer.view())


def incremental_buffer_destroy(handle):
    with _lock:
        buffer = _buffers.pop(handle, None)
    if buffer is None:
        logger.warning(f'incremental_buffer_destroy() on unknown handle {handle!r}')
    else:
        logger.debug(f'Destroyed incremental buffer {handle}')
