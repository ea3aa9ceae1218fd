#!/usr/bin/env python3
"""
vi_cli.py - Command-line interface for the Vietnamese transformation engine
Giao diện dòng lệnh cho bộ chuyển đổi tiếng Việt

================================================================================
OVERVIEW / Tổng quan
================================================================================

This CLI gives access to the engine without an input method framework,
for people who want to:

    1. Convert typed TELEX/VNI text in scripts and pipelines
       Chuyển văn bản gõ TELEX/VNI trong script
    2. Watch how a word changes keystroke by keystroke
       Xem từng bước biến đổi của một từ
    3. Get the keystrokes for a piece of Vietnamese text
       Lấy chuỗi phím gõ cho một đoạn văn bản
    4. Try custom input method definitions
       Thử kiểu gõ tự định nghĩa

================================================================================
USAGE / Cách dùng
================================================================================

    # Transform text (stdin when TEXT is omitted)
    vi-ime transform "tieengs Vieetj"

    # VNI with old-style accents
    vi-ime -m vni -s old transform "hoa2"

    # Show the view after every keystroke
    vi-ime trace chuwongw

    # Vietnamese text to keystrokes
    vi-ime -m vni keys "người Việt"

    # Interactive: every line typed is transformed
    vi-ime repl

    # Custom definition (file path or name under ~/.config/vi-ime/methods/)
    vi-ime -m vni-z.json transform "nhzng4"

Without -m/-s the method and style come from ~/.config/vi-ime/config.json.

================================================================================
"""

import argparse
import sys
import os
import logging

# Add src directory to path if needed
src_dir = os.path.dirname(os.path.abspath(__file__))
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

import input_method
import keystrokes
import placement
import util
from incremental import IncrementalBuffer
from transform import transform

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s %(message)s',
        datefmt='%H:%M:%S'
    )


def resolve_settings(args):
    """
    Work out the input method table and accent style for this run.

    Returns:
        tuple: (InputMethodTable, AccentStyle), or None after printing an error
    """
    method_name = args.method
    style_name = args.style
    config = None
    if method_name is None or style_name is None:
        config, warnings = util.get_config_data()
        if config is None:
            print("ERROR: No configuration available; pass --method and --style")
            return None

    if method_name is None:
        table = util.get_input_method_table(config)
    else:
        try:
            table = input_method.get_table(method_name)
        except ValueError:
            path = util.find_input_method_file(method_name)
            if path is None:
                print(f"ERROR: Unknown input method: {method_name}")
                return None
            table = util.load_input_method_definition(path)
            if table is None:
                print(f"ERROR: Could not load input method definition: {path}")
                return None

    try:
        style = placement.get_accent_style(style_name if style_name is not None else config['accent_style'])
    except ValueError as e:
        print(f"ERROR: {e}")
        return None
    return table, style


def cmd_transform(args, table, style):
    """Transform TEXT, or every line of stdin."""
    if args.text is not None:
        print(transform(table, style, args.text))
        return 0
    for line in sys.stdin:
        sys.stdout.write(transform(table, style, line))
    return 0


def cmd_trace(args, table, style):
    """Print the resolved action and the buffer view after every keystroke of WORD."""
    buffer = IncrementalBuffer(table, style)
    for char in args.word:
        result = buffer.push(char)
        flags = []
        if result.tone_mark_removed:
            flags.append('tone removed')
        if result.letter_modification_removed:
            flags.append('modification removed')
        suffix = f"  ({', '.join(flags)})" if flags else ''
        kind = buffer.last_keystroke().action.kind.value
        print(f"  {char!r:6} {kind:14} → {buffer.view()}{suffix}")
    return 0


def cmd_keys(args, table, style):
    """Print the keystrokes that type TEXT."""
    if table is input_method.VNI:
        method = input_method.InputMethod.VNI
    elif table is input_method.TELEX:
        method = input_method.InputMethod.TELEX
    else:
        print(f"ERROR: Reverse conversion supports telex and vni only, not {table.name}")
        return 1
    print(keystrokes.to_keystrokes(args.text, method))
    return 0


def cmd_repl(args, table, style):
    """Read lines interactively and print their transformation."""
    print(f"{table.name} / {style.value} - Ctrl-D to quit")
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            return 0
        print(transform(table, style, line))


def main(argv=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog='vi-ime',
        description="Vietnamese TELEX/VNI transformation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vi-ime transform "tieengs Vieetj"
  vi-ime -m vni -s old transform "hoa2"
  vi-ime trace chuwongw
  vi-ime -m vni keys "người Việt"
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose output')
    parser.add_argument('-m', '--method',
                        help='telex, vni or an input method definition file (default: from config)')
    parser.add_argument('-s', '--style',
                        help='Accent style: old or new (default: from config)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    transform_parser = subparsers.add_parser('transform', help='Transform typed text')
    transform_parser.add_argument('text', nargs='?', help='Text to transform (default: read stdin)')

    trace_parser = subparsers.add_parser('trace', help='Show the text after every keystroke')
    trace_parser.add_argument('word', help='Keystrokes to replay')

    keys_parser = subparsers.add_parser('keys', help='Convert Vietnamese text to keystrokes')
    keys_parser.add_argument('text', help='Vietnamese text')

    subparsers.add_parser('repl', help='Transform lines typed interactively')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    settings = resolve_settings(args)
    if settings is None:
        return 1
    table, style = settings

    # Dispatch to command handler
    if args.command == 'transform':
        return cmd_transform(args, table, style)
    elif args.command == 'trace':
        return cmd_trace(args, table, style)
    elif args.command == 'keys':
        return cmd_keys(args, table, style)
    elif args.command == 'repl':
        return cmd_repl(args, table, style)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
