"""Glyph representation and the glyph set.

This module defines the glyph domain model, which binds a character to the
layer stack drawn for it, and the GlyphSet that holds every glyph of a
conscript.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from conscript.domain.layer import Layer, layer_from_dict

# First code point of the Unicode Private Use Area
PRIVATE_USE_BASE = 0xE000
MAX_CODE_POINT = 0x10FFFF


def private_use_alias(character: str) -> str | None:
    """Return the private-use alias assigned to ``character``.

    Every saved glyph is reachable both by its literal character and by this
    alias, so that conscript text can be written in the private-use range.

    Args:
        character: A single character

    Returns:
        The aliased private-use character, or None past the last code point
    """
    code_point = PRIVATE_USE_BASE + ord(character)
    if code_point > MAX_CODE_POINT:
        return None
    return chr(code_point)


@dataclass(frozen=True)
class Glyph:
    """The artwork bound to one character.

    Glyphs are replaced wholesale on save, never partially mutated.

    Attributes:
        character: The literal character
        alias: Private-use alias character (None if the glyph has none)
        layers: Layer stack in paint order (bottom first)
        bounding_width: Derived horizontal extent in canvas units
    """

    character: str
    alias: str | None
    layers: tuple[Layer, ...]
    bounding_width: float

    def visible_layers(self) -> list[Layer]:
        """Get the layers that are painted.

        Returns:
            Visible layers in paint order
        """
        return [layer for layer in self.layers if layer.visible]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the glyph
        """
        return {
            "character": self.character,
            "alias": self.alias,
            "layers": [layer.to_dict() for layer in self.layers],
            "bounding_width": self.bounding_width,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Glyph":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a glyph

        Returns:
            Glyph instance
        """
        return cls(
            character=data["character"],
            alias=data.get("alias"),
            layers=tuple(layer_from_dict(layer) for layer in data["layers"]),
            bounding_width=data["bounding_width"],
        )


class GlyphSet:
    """Immutable mapping from characters to glyphs.

    Lookups resolve the literal character first and the private-use alias
    second. Updates return a new GlyphSet so that readers always observe a
    complete set, either before or after a commit.

    Example:
        glyph_set = GlyphSet().with_glyph(glyph)
        glyph_set.lookup("a")
    """

    __slots__ = ("_by_alias", "_glyphs")

    def __init__(self, glyphs: "list[Glyph] | tuple[Glyph, ...] | None" = None) -> None:
        by_char: dict[str, Glyph] = {}
        for glyph in glyphs or ():
            by_char[glyph.character] = glyph
        self._glyphs = by_char
        self._by_alias = {g.alias: g for g in by_char.values() if g.alias}

    def lookup(self, key: str) -> Glyph | None:
        """Find the glyph for ``key``, literal character first, alias second.

        Args:
            key: Character to resolve

        Returns:
            The matching glyph, or None if neither mapping has one
        """
        glyph = self._glyphs.get(key)
        if glyph is not None:
            return glyph
        return self._by_alias.get(key)

    def get(self, character: str) -> Glyph | None:
        """Get a glyph by its literal character only."""
        return self._glyphs.get(character)

    def with_glyph(self, glyph: Glyph) -> "GlyphSet":
        """Return a new set where ``glyph`` replaces any glyph for its character.

        Args:
            glyph: Glyph to store

        Returns:
            New GlyphSet instance
        """
        glyphs = dict(self._glyphs)
        glyphs[glyph.character] = glyph
        return GlyphSet(list(glyphs.values()))

    def without(self, character: str) -> "GlyphSet":
        """Return a new set without the glyph for ``character``."""
        return GlyphSet([g for c, g in self._glyphs.items() if c != character])

    def characters(self) -> list[str]:
        """Get literal characters in insertion order."""
        return list(self._glyphs)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key) is not None

    def __iter__(self) -> Iterator[Glyph]:
        return iter(self._glyphs.values())

    def __len__(self) -> int:
        return len(self._glyphs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlyphSet):
            return NotImplemented
        return self._glyphs == other._glyphs

    def __hash__(self) -> int:
        return hash(tuple(self._glyphs.items()))

    def __repr__(self) -> str:
        return f"GlyphSet({''.join(self._glyphs)!r})"

    def to_dict(self) -> dict[str, Any]:
        return {"glyphs": [glyph.to_dict() for glyph in self]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphSet":
        return cls([Glyph.from_dict(g) for g in data["glyphs"]])
