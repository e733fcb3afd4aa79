"""Command line interface: ``python -m tagtree PATH``."""

import argparse
import logging
import sys
from pathlib import Path

from .errors import StrictModeError
from .parser import TagTree


def _read_input(path):
    if path == "-":
        return sys.stdin.read()
    path = Path(path)
    if not path.is_file():
        return None
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="tagtree",
        description="Parse HTML mixed with PHP/Ruby template blocks and print it back",
    )
    parser.add_argument("path", help="File to parse, or - to read stdin")
    parser.add_argument("--pretty", "-p", action="store_true", help="Indent the output with tabs")
    parser.add_argument("--strict", action="store_true", help="Fail on the first misnested end tag")
    parser.add_argument("--errors", "-e", action="store_true", help="List repaired nesting problems on stderr")
    parser.add_argument("--debug", action="store_true", help="Trace every entity read")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    text = _read_input(args.path)
    if text is None:
        print(f"tagtree: {args.path}: no such file", file=sys.stderr)
        return 1

    try:
        doc = TagTree(text, strict=args.strict, debug=args.debug)
    except StrictModeError as exc:
        print(f"tagtree: {exc.error}", file=sys.stderr)
        return 1

    if args.errors:
        for error in doc.errors:
            print(str(error), file=sys.stderr)

    if doc.root is None:
        return 1

    if args.pretty:
        sys.stdout.write(doc.root.pretty_print())
    else:
        sys.stdout.write(doc.root.to_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
