from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from .codec import decode, encode
from .config import trace
from .jsonio import fumen_from_json, fumen_to_json


def _describe_page(index: int, page) -> List[str]:
    lines = [f"Page {index + 1}:"]
    if page.piece is not None:
        p = page.piece
        lines.append(f"  piece: {p.kind.name} {p.rotation.name.lower()} at ({p.x}, {p.y})")
    flags = [name for name, on in (('rise', page.rise), ('mirror', page.mirror), ('no-lock', not page.lock)) if on]
    if flags:
        lines.append('  flags: ' + ', '.join(flags))
    if page.comment is not None:
        lines.append(f"  comment: {page.comment}")
    lines.append(page.pretty())
    return lines


def _read_source(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='fumen', description='Encode and decode fumen (v115) strings')
    sub = parser.add_subparsers(dest='command', required=True)

    p_decode = sub.add_parser('decode', help='Decode a fumen string to JSON')
    p_decode.add_argument('fumen', help='Fumen string, e.g. v115@vhAAgH')
    p_decode.add_argument('--indent', type=int, default=2, help='JSON indent (0 for compact)')

    p_encode = sub.add_parser('encode', help='Encode a JSON document to a fumen string')
    p_encode.add_argument('source', help="JSON file path, or '-' for stdin")

    p_show = sub.add_parser('show', help='Print the pages of a fumen string as text')
    p_show.add_argument('fumen', help='Fumen string')
    p_show.add_argument('--page', type=int, default=None, help='Show only this page (1-based)')

    args = parser.parse_args(argv)

    try:
        if args.command == 'decode':
            doc = decode(args.fumen.strip())
            print(json.dumps(fumen_to_json(doc), indent=args.indent or None, ensure_ascii=False))
        elif args.command == 'encode':
            obj = json.loads(_read_source(args.source))
            print(encode(fumen_from_json(obj)))
        else:
            doc = decode(args.fumen.strip())
            if args.page is not None:
                if not 1 <= args.page <= len(doc.pages):
                    print(f"error: page {args.page} out of range (1-{len(doc.pages)})", file=sys.stderr)
                    return 1
                selected = [(args.page - 1, doc.pages[args.page - 1])]
            else:
                selected = list(enumerate(doc.pages))
            print(f"{len(doc.pages)} page(s), guideline={'on' if doc.guideline else 'off'}")
            for i, page in selected:
                print('\n'.join(_describe_page(i, page)))
    except (ValueError, KeyError, TypeError) as e:
        trace(f"{args.command} failed: {type(e).__name__}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
