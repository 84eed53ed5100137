"""
Fumen core Python package.

Pure codec between fumen documents and `v115@` strings. Modules:
- alphabet.py: 64-symbol digit table and little-endian digit groups
- board.py: cell colors, field constants and text dumps
- piece.py: Piece, kinds, rotations and the format coordinate mapper
- page.py, document.py: Page and Fumen
- transition.py: lock / line clear / rise / mirror rules
- field.py: field delta run-length codec
- comment.py: comment escape and packing
- codec.py: encode, decode
- jsonio.py, cli.py: JSON mapping and command line
"""
