import argparse
import json
import logging
import sys
from pathlib import Path

from .model import Kind
from .types import mk_nodes, render_all

logger = logging.getLogger(__name__)


def _load_document(source: str) -> dict:
    text: str = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    doc = json.loads(text)
    if isinstance(doc, list):
        return {"nodes": doc}
    if not isinstance(doc, dict):
        raise ValueError("Spec must be a JSON object or a list of nodes")
    return doc


def cmd_render(args: argparse.Namespace) -> None:
    doc = _load_document(args.spec)
    nodes = mk_nodes(doc, size=args.indent_size, fill=args.fill)
    out: str = render_all(nodes)
    if args.output:
        Path(args.output).write_text(out, encoding="utf-8")
        logger.info("Wrote %d node(s) to %s", len(nodes), args.output)
    else:
        print(out, end="")


def cmd_kinds(args: argparse.Namespace) -> None:
    for kind in Kind:
        print(kind.value)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("cppcodegen")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    sub = p.add_subparsers(required=True)

    s = sub.add_parser("render", help="Render a JSON node tree to indented source text")
    s.add_argument("spec", help="Path to the JSON spec, or '-' for stdin")
    s.add_argument("-o", "--output", help="Write to this file instead of stdout")
    s.add_argument("--indent-size", dest="indent_size", type=int, help="Characters per indent level")
    s.add_argument("--fill", help="Indent fill character")
    s.set_defaults(func=cmd_render)

    s = sub.add_parser("kinds", help="List node kinds accepted in specs")
    s.set_defaults(func=cmd_kinds)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except (ValueError, OSError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"cppcodegen: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
