"""Conscript - Author and render constructed writing systems.

Conscript is the authoring and rendering engine for hand-drawn scripts:
vector glyphs are drawn layer by layer, bound to characters, and laid out
again as flowing text in one of four writing directions.

Example:
    $ conscript render project.json "hello"

This prints the layout tree of "hello" using the glyphs stored in the
project's script configuration.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
