#!/usr/bin/env python3
"""
Timeline Tool

Command line front-end for timeline records.

Commands:
1. dump    - decode a binary timeline and print / write it as JSON
2. check   - decode one or more records and report which ones are valid
3. compile - build a binary timeline from JSON
4. rewrite - decode and re-encode a record, stamping current format versions

Usage:
    gm-timeline dump intro.timeline
    gm-timeline --lenient rewrite old.timeline --output new.timeline
"""

import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

from .assets import Timeline
from .config import load_parser_options
from .parsers import ByteReader, FormatError, ParserOptions
from .utils import (
    log, logWarning, logError, init_logging, close_logging, print_summary, get_counts,
)


def resolve_options(args) -> ParserOptions:
    """--strict / --lenient override the config file, which overrides defaults."""
    options = load_parser_options(args.config)
    if args.strict is not None:
        options.strict = args.strict
    return options


def cmd_dump(args, options: ParserOptions):
    log(f"Dumping {args.file} (strict={options.strict})")
    timeline = Timeline.from_file(args.file, options)
    text = json.dumps(timeline.to_dict(), indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(text + "\n", encoding='utf-8')
        log(f"  Wrote {args.output}")
    else:
        print(text)

    log(f"  '{timeline.name}': {timeline.moment_count} moments, {timeline.action_count} actions")


def cmd_check(args, options: ParserOptions):
    log(f"Checking {len(args.files)} file(s) (strict={options.strict})")

    for filepath in args.files:
        try:
            data = Path(filepath).read_bytes()
            reader = ByteReader(data)
            timeline = Timeline.deserialize(reader, options)
        except (FormatError, OSError) as e:
            logError(f"{filepath}: {e}")
            continue

        if not reader.at_end:
            logWarning(f"{filepath}: {reader.remaining_bytes} trailing bytes after record")
        log(f"  OK  {filepath}: '{timeline.name}', {timeline.moment_count} moments, "
            f"{timeline.action_count} actions")


def cmd_compile(args, options: ParserOptions):
    log(f"Compiling {args.json} -> {args.output}")
    data = json.loads(Path(args.json).read_text(encoding='utf-8'))
    timeline = Timeline.from_dict(data)
    size = timeline.write_file(args.output)
    log(f"  '{timeline.name}': {size:,} bytes")


def cmd_rewrite(args, options: ParserOptions):
    output = args.output or args.file
    log(f"Rewriting {args.file} -> {output} (strict={options.strict})")
    timeline = Timeline.from_file(args.file, options)
    size = timeline.write_file(output)
    log(f"  '{timeline.name}': {size:,} bytes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gm-timeline',
        description='Inspect, validate and convert timeline records',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    gm-timeline dump tl_intro.timeline --output tl_intro.json
    gm-timeline check assets/*.timeline
    gm-timeline compile tl_intro.json --output tl_intro.timeline

    # Accept records written by other format generations:
    gm-timeline --lenient rewrite old.timeline --output new.timeline

Note: The default parser policy can be set in an INI file:
    [parser]
    strict = false
        """
    )

    parser.add_argument('--config', default=None,
                        help='Path to parser INI configuration file')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--strict', dest='strict', action='store_true', default=None,
                      help='Reject records whose version fields are not current')
    mode.add_argument('--lenient', dest='strict', action='store_false',
                      help='Ignore version fields when reading')
    parser.set_defaults(strict=None)
    parser.add_argument('--log', default=None,
                        help='Path to log file (default: gm_timeline.log)')

    sub = parser.add_subparsers(dest='command', required=True)

    dump = sub.add_parser('dump', help='Print a timeline record as JSON')
    dump.add_argument('file', help='Binary timeline record')
    dump.add_argument('--output', help='Write JSON here instead of stdout')
    dump.set_defaults(func=cmd_dump)

    check = sub.add_parser('check', help='Validate timeline records')
    check.add_argument('files', nargs='+', help='Binary timeline records')
    check.set_defaults(func=cmd_check)

    compile_ = sub.add_parser('compile', help='Build a timeline record from JSON')
    compile_.add_argument('json', help='JSON timeline description')
    compile_.add_argument('--output', required=True, help='Output record path')
    compile_.set_defaults(func=cmd_compile)

    rewrite = sub.add_parser('rewrite', help='Re-encode a record with current versions')
    rewrite.add_argument('file', help='Binary timeline record')
    rewrite.add_argument('--output', help='Output path (default: overwrite input)')
    rewrite.set_defaults(func=cmd_rewrite)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    init_logging(Path(args.log) if args.log else None)

    try:
        options = resolve_options(args)
        args.func(args, options)
    except (FormatError, OSError, ValueError) as e:
        logError(f"{e}")

    print_summary()
    error_count, _ = get_counts()
    close_logging()
    return 1 if error_count else 0


if __name__ == '__main__':
    sys.exit(main())
