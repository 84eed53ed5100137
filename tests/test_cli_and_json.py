import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from fumen import (
    CellColor,
    Fumen,
    Page,
    Piece,
    PieceType,
    Rotation,
    decode,
    fumen_from_json,
    fumen_to_json,
    page_from_json,
    page_to_json,
    piece_from_json,
    piece_to_json,
)
from fumen_core.cli import main


def run_cli(*argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(list(argv))
    return code, out.getvalue(), err.getvalue()


class TestJson(unittest.TestCase):
    def test_given_piece_when_roundtrip_json_then_equal(self):
        p = Piece(PieceType.S, Rotation.EAST, 3, 7)
        pj = piece_to_json(p)
        self.assertEqual(pj, {"kind": "S", "rotation": "east", "x": 3, "y": 7})
        self.assertEqual(piece_from_json(pj), p)
        # case-insensitive names
        self.assertEqual(piece_from_json({"kind": "s", "rotation": "EAST", "x": "3", "y": 7}), p)
        self.assertIsNone(piece_to_json(None))
        with self.assertRaises(ValueError):
            piece_from_json({"kind": "S", "rotation": "up", "x": 0, "y": 0})

    def test_given_page_when_roundtrip_json_then_equal(self):
        page = Page(
            piece=Piece(PieceType.Z, Rotation.NORTH, 4, 2),
            lock=False,
            rise=True,
            comment="note",
        ).with_cell(0, 0, CellColor.GREY).with_garbage([CellColor.GREY] * 9 + [CellColor.EMPTY])
        pj = page_to_json(page)
        self.assertEqual(pj["field"][0], "X_________")
        self.assertEqual(pj["garbageRow"], "XXXXXXXXX_")
        self.assertEqual(page_from_json(pj), page)

    def test_given_sparse_page_json_when_parsed_then_defaults(self):
        self.assertEqual(page_from_json({}), Page())
        with self.assertRaises(ValueError):
            page_from_json({"field": ["__________"] * 24})

    def test_given_non_bool_flag_when_parsed_then_value_error(self):
        for key in ("rise", "mirror", "lock"):
            with self.assertRaises(ValueError, msg=key):
                page_from_json({key: "false"})
        with self.assertRaises(ValueError):
            page_from_json({"lock": 0})
        with self.assertRaises(ValueError):
            fumen_from_json({"guideline": "no", "pages": []})
        self.assertFalse(page_from_json({"lock": False}).lock)

    def test_given_document_when_roundtrip_json_then_equal(self):
        f = Fumen(guideline=False)
        f.add_page(piece=Piece(PieceType.L, Rotation.SOUTH, 5, 1))
        f.add_page(comment="next")
        self.assertEqual(fumen_from_json(json.loads(json.dumps(fumen_to_json(f)))), f)


class TestCli(unittest.TestCase):
    def test_given_fumen_when_decode_command_then_json_printed(self):
        code, out, _ = run_cli("decode", "v115@vhAVPJ")
        self.assertEqual(code, 0)
        doc = json.loads(out)
        self.assertEqual(doc["pages"][0]["piece"]["kind"], "T")

    def test_given_json_file_when_encode_command_then_fumen_printed(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "doc.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"pages": [{"comment": "Hello World!"}]}, f)
            code, out, _ = run_cli("encode", path)
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "v115@vhAAgWQAIoMDEvoo2AXXaDEkoA6A")

    def test_given_stdin_when_encode_command_then_reads_json(self):
        with mock.patch("sys.stdin", io.StringIO('{"pages": []}')):
            code, out, _ = run_cli("encode", "-")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "v115@")

    def test_given_fumen_when_show_command_then_pages_rendered(self):
        code, out, _ = run_cli("show", "v115@vhAVPJThQLHeSLPeAAA")
        self.assertEqual(code, 0)
        self.assertIn("2 page(s)", out)
        self.assertIn("piece: T north at (2, 0)", out)
        self.assertIn("_###______", out)

        code, out, _ = run_cli("show", "v115@vhAVPJThQLHeSLPeAAA", "--page", "2")
        self.assertEqual(code, 0)
        self.assertNotIn("Page 1:", out)
        self.assertIn("Page 2:", out)

    def test_given_bad_input_when_cli_then_error_exit(self):
        code, _, err = run_cli("decode", "v114@")
        self.assertEqual(code, 1)
        self.assertIn("error:", err)

        code, _, err = run_cli("show", "v115@vhAAgH", "--page", "3")
        self.assertEqual(code, 1)
        self.assertIn("out of range", err)

    def test_given_debug_env_when_error_then_trace_printed(self):
        with mock.patch.dict(os.environ, {"FUMEN_DEBUG": "1"}):
            code, _, err = run_cli("decode", "v115@vh!")
        self.assertEqual(code, 1)
        self.assertIn("[fumen] decode failed: AlphabetError", err)

    def test_given_decoded_output_when_encoded_then_same_document(self):
        text = "v115@bhwhglQpAtwwg0Q4A8LeAQLvhAAAAdhAAwDgHQLAPwSgWQaJeAAA"
        _, out, _ = run_cli("decode", text, "--indent", "0")
        with mock.patch("sys.stdin", io.StringIO(out)):
            code, again, _ = run_cli("encode", "-")
        self.assertEqual(code, 0)
        self.assertEqual(again.strip(), text)
        self.assertEqual(decode(again.strip()), decode(text))


if __name__ == "__main__":
    unittest.main(verbosity=2)
