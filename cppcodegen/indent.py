from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_INDENT_SIZE: int = 2
DEFAULT_FILL_CHAR: str = " "


@dataclass
class Indent:
    """
    Depth-scaled indentation prefix.
    The per-level unit is built once; the total prefix is always ``unit * level``.
    """
    level: int = 0
    size: int = DEFAULT_INDENT_SIZE
    character: str = DEFAULT_FILL_CHAR
    unit: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.level < 0:
            raise ValueError(f"Indent level must be non-negative, got {self.level}")
        if self.size < 0:
            raise ValueError(f"Indent size must be non-negative, got {self.size}")
        if len(self.character) != 1:
            raise ValueError(f"Indent fill must be a single character, got {self.character!r}")
        self.unit = self.character * self.size

    def indenting(self) -> str:
        return self.unit * self.level

    def increase(self, delta: int = 1) -> None:
        if delta < 0:
            raise ValueError(f"Indent can only grow, got delta={delta}")
        self.level += delta

    def child(self) -> "Indent":
        """Indent one level deeper with the same size and fill."""
        return Indent(self.level + 1, self.size, self.character)
