from __future__ import annotations

from typing import Any, Dict, Optional

from .board import EMPTY_ROW, FIELD_HEIGHT, make_field, row_from_str, row_to_str
from .document import Fumen
from .page import Page
from .piece import Piece, PieceType, Rotation


def _flag(obj: Dict[str, Any], key: str, default: bool) -> bool:
    value = obj.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def piece_to_json(p: Optional[Piece]) -> Optional[Dict[str, Any]]:
    if p is None:
        return None
    return {"kind": p.kind.name, "rotation": p.rotation.name.lower(), "x": int(p.x), "y": int(p.y)}


def piece_from_json(obj: Optional[Dict[str, Any]]) -> Optional[Piece]:
    if obj is None:
        return None
    try:
        kind = PieceType[str(obj["kind"]).upper()]
        rotation = Rotation[str(obj["rotation"]).upper()]
    except KeyError as e:
        raise ValueError(f"bad piece: {e}") from None
    return Piece(kind=kind, rotation=rotation, x=int(obj["x"]), y=int(obj["y"]))


def page_to_json(page: Page) -> Dict[str, Any]:
    return {
        "piece": piece_to_json(page.piece),
        "field": [row_to_str(r) for r in page.field],
        "garbageRow": row_to_str(page.garbage_row),
        "rise": page.rise,
        "mirror": page.mirror,
        "lock": page.lock,
        "comment": page.comment,
    }


def page_from_json(obj: Dict[str, Any]) -> Page:
    """Builds a page; missing keys take the blank-page defaults. Rows are listed bottom row first."""
    rows = obj.get("field")
    if rows is None:
        field = Page().field
    else:
        if len(rows) > FIELD_HEIGHT:
            raise ValueError(f"field has {len(rows)} rows, at most {FIELD_HEIGHT} allowed")
        parsed = [row_from_str(str(r)) for r in rows]
        parsed.extend([EMPTY_ROW] * (FIELD_HEIGHT - len(parsed)))
        field = make_field(parsed)
    garbage = obj.get("garbageRow")
    comment = obj.get("comment")
    return Page(
        piece=piece_from_json(obj.get("piece")),
        field=field,
        garbage_row=EMPTY_ROW if garbage is None else row_from_str(str(garbage)),
        rise=_flag(obj, "rise", False),
        mirror=_flag(obj, "mirror", False),
        lock=_flag(obj, "lock", True),
        comment=None if comment is None else str(comment),
    )


def fumen_to_json(fumen: Fumen) -> Dict[str, Any]:
    return {"guideline": fumen.guideline, "pages": [page_to_json(p) for p in fumen.pages]}


def fumen_from_json(obj: Dict[str, Any]) -> Fumen:
    pages = obj.get("pages", [])
    if not isinstance(pages, list):
        raise ValueError("pages must be a list")
    return Fumen(pages=[page_from_json(p) for p in pages], guideline=_flag(obj, "guideline", True))
