"""logic — Game rules package.

Top-level modules
-----------------
level           — grid model, XSB parser, move/push resolver, undo
slc             — SLC (XML) level collection loader
session         — level sequencing: retry, skip, advance on completion
shadow          — wall shadows cast onto floor cells
input_manager   — raw input → intent mapping
"""
