"""Script configuration: glyph set, writing direction and spacing mode."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from conscript.domain.glyph import GlyphSet


class WritingDirection(str, Enum):
    """Writing direction of a conscript.

    - LTR / RTL: horizontal lines stacked top to bottom
    - TTB_RTL: vertical columns, new columns to the left
    - TTB_LTR: vertical columns, new columns to the right
    """

    LTR = "ltr"
    RTL = "rtl"
    TTB_RTL = "ttb-rtl"
    TTB_LTR = "ttb-ltr"

    @property
    def is_vertical(self) -> bool:
        """True for the top-to-bottom directions."""
        return self in (WritingDirection.TTB_RTL, WritingDirection.TTB_LTR)

    @classmethod
    def parse(cls, value: str | None) -> "WritingDirection":
        """Parse a persisted direction value.

        Older projects store a bare ``ttb`` for vertical columns stacked
        right to left; a missing value means left-to-right.

        Args:
            value: Persisted direction string

        Returns:
            WritingDirection member

        Raises:
            ValueError: If the value is not a known direction
        """
        if not value:
            return cls.LTR
        if value == "ttb":
            return cls.TTB_RTL
        return cls(value)


class SpacingMode(str, Enum):
    """How character advances are measured."""

    PROPORTIONAL = "proportional"
    MONO = "mono"

    def toggled(self) -> "SpacingMode":
        """Return the other spacing mode."""
        if self is SpacingMode.PROPORTIONAL:
            return SpacingMode.MONO
        return SpacingMode.PROPORTIONAL


@dataclass(frozen=True)
class ScriptConfig:
    """Per-document script configuration.

    Replaced as a whole whenever a glyph is saved or a toggle changes, so a
    layout in progress never observes a partial update.

    Attributes:
        glyph_set: All glyphs of the conscript
        direction: Writing direction
        spacing_mode: Spacing regime
    """

    glyph_set: GlyphSet = field(default_factory=GlyphSet)
    direction: WritingDirection = WritingDirection.LTR
    spacing_mode: SpacingMode = SpacingMode.MONO

    def with_glyph_set(self, glyph_set: GlyphSet) -> "ScriptConfig":
        return replace(self, glyph_set=glyph_set)

    def with_direction(self, direction: WritingDirection) -> "ScriptConfig":
        return replace(self, direction=direction)

    def with_spacing_mode(self, spacing_mode: SpacingMode) -> "ScriptConfig":
        return replace(self, spacing_mode=spacing_mode)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        return {
            "glyph_set": self.glyph_set.to_dict(),
            "direction": self.direction.value,
            "spacing_mode": self.spacing_mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScriptConfig":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a script configuration

        Returns:
            ScriptConfig instance
        """
        return cls(
            glyph_set=GlyphSet.from_dict(data["glyph_set"]),
            direction=WritingDirection.parse(data.get("direction")),
            spacing_mode=SpacingMode(data.get("spacing_mode", SpacingMode.MONO.value)),
        )
