from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Protocol, Union, runtime_checkable

"""Composable, indentation-aware source text model.

Callers build a tree bottom-up from snippets (wrapped lines), blocks
(header/footer pairs around deeper snippets) and class blocks (visibility
partitioned blocks), then call ``render()`` on the root. Nested structures are
flattened into a parent snippet's lines when added, so every node only ever
applies its own single level of indentation.
"""

from .indent import Indent


class Kind(Enum):
    LINE = "line"
    SYSTEM_INCLUDE = "system_include"
    LOCAL_INCLUDE = "local_include"
    CODE_BLOCK = "code_block"
    DEFINITION = "definition"
    NAMESPACE = "namespace"
    CLASS = "class"


class AccessSpecifier(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


# Render order of class partitions, independent of insertion order.
ACCESS_ORDER: tuple[AccessSpecifier, ...] = (
    AccessSpecifier.PUBLIC,
    AccessSpecifier.PROTECTED,
    AccessSpecifier.PRIVATE,
)


@runtime_checkable
class Renderable(Protocol):
    """Anything that can be rendered to newline-terminated text."""

    def render(self) -> str: ...


Item = Union[str, Renderable, Iterable["Item"]]


def _split_lines(text: str) -> list[str]:
    """Split on newlines; a trailing newline does not yield an empty last line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


# -----------------------------
# Leaf
# -----------------------------

@dataclass
class Snippet:
    """Ordered lines, each already wrapped in the snippet's header and footer.

    ``header``/``footer`` follow from ``kind``; ``base_path`` only matters for
    local includes. The given ``indent`` is copied, never shared.
    """
    kind: Kind = Kind.LINE
    indent: Indent = field(default_factory=Indent)
    base_path: str = ""
    header: str = field(init=False)
    footer: str = field(init=False)
    _lines: list[str] = field(init=False, default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.kind is Kind.LINE:
            self.header, self.footer = "", ""
        elif self.kind is Kind.SYSTEM_INCLUDE:
            self.header, self.footer = "#include <", ">"
        elif self.kind is Kind.LOCAL_INCLUDE:
            self.header, self.footer = '#include "' + self.base_path, '"'
        else:
            raise ValueError(f"Snippet cannot be of kind '{self.kind.value}'")
        self.indent = replace(self.indent)

    @classmethod
    def line(cls, indent: Indent | None = None) -> "Snippet":
        return cls(Kind.LINE, indent or Indent())

    @classmethod
    def system_include(cls, indent: Indent | None = None) -> "Snippet":
        return cls(Kind.SYSTEM_INCLUDE, indent or Indent())

    @classmethod
    def local_include(cls, base_path: str = "", indent: Indent | None = None) -> "Snippet":
        return cls(Kind.LOCAL_INCLUDE, indent or Indent(), base_path)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def add_line(self, text: str) -> None:
        """Append ``header + text + footer``.

        ``text`` is not inspected: embedded newlines end up inside a single
        stored line and only become separate lines if the snippet is later
        absorbed elsewhere.
        """
        self._lines.append(self.header + text + self.footer)

    def add_lines(self, texts: Iterable[str]) -> None:
        for text in texts:
            self.add_line(text)

    def absorb(self, node: Renderable) -> None:
        """Flatten ``node``'s rendered text into plain, unwrapped lines."""
        self._lines.extend(_split_lines(node.render()))

    def add(self, item: Item) -> None:
        if isinstance(item, str):
            self.add_line(item)
        elif isinstance(item, Renderable):
            self.absorb(item)
        else:
            for each in item:
                self.add(each)

    def render(self) -> str:
        prefix = self.indent.indenting()
        return "".join(f"{prefix}{ln}\n" for ln in self._lines)

    def increase_indent(self, delta: int = 1) -> None:
        self.indent.increase(delta)


# -----------------------------
# Containers
# -----------------------------

def _child_snippet(indent: Indent, item: Item) -> Snippet:
    snippet = Snippet.line(indent.child())
    snippet.add(item)
    return snippet


@dataclass
class Block:
    """Header/footer pair around snippets rendered one level deeper."""
    kind: Kind = Kind.CODE_BLOCK
    indent: Indent = field(default_factory=Indent)
    declaration: str = ""
    name: str = ""
    header: str = field(init=False)
    footer: str = field(init=False, default="}\n")
    snippets: list[Snippet] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.kind is Kind.CODE_BLOCK:
            self.header = "{\n"
        elif self.kind is Kind.DEFINITION:
            self.header = self.declaration + " {\n"
        elif self.kind is Kind.NAMESPACE:
            self.header = "namespace " + self.name + " {\n"
        else:
            raise ValueError(f"Block cannot be of kind '{self.kind.value}'")
        self.indent = replace(self.indent)

    @classmethod
    def code_block(cls, indent: Indent | None = None) -> "Block":
        return cls(Kind.CODE_BLOCK, indent or Indent())

    @classmethod
    def definition(cls, declaration: str, indent: Indent | None = None) -> "Block":
        return cls(Kind.DEFINITION, indent or Indent(), declaration=declaration)

    @classmethod
    def namespace(cls, name: str, indent: Indent | None = None) -> "Block":
        return cls(Kind.NAMESPACE, indent or Indent(), name=name)

    def add(self, item: Item) -> None:
        """Add a node or raw line as a new child snippet; lists and tuples add one snippet per element."""
        if isinstance(item, (list, tuple)):
            for each in item:
                self.add(each)
            return
        self.snippets.append(_child_snippet(self.indent, item))

    def render(self) -> str:
        prefix = self.indent.indenting()
        body = "".join(s.render() for s in self.snippets)
        return f"{prefix}{self.header}{body}{prefix}{self.footer}"

    def increase_indent(self, delta: int = 1) -> None:
        for snippet in self.snippets:
            snippet.increase_indent(delta)
        self.indent.increase(delta)


@dataclass
class ClassBlock:
    name: str
    indent: Indent = field(default_factory=Indent)
    keyword: str = "class"
    partitions: dict[AccessSpecifier, list[Snippet]] = field(
        init=False, default_factory=lambda: {access: [] for access in ACCESS_ORDER}
    )

    def __post_init__(self) -> None:
        self.indent = replace(self.indent)

    @property
    def kind(self) -> Kind:
        return Kind.CLASS

    @property
    def header(self) -> str:
        return f"{self.keyword} {self.name} {{\n"

    @property
    def footer(self) -> str:
        return "};\n"

    def add(self, item: Item, access: AccessSpecifier = AccessSpecifier.PRIVATE) -> None:
        if isinstance(item, (list, tuple)):
            for each in item:
                self.add(each, access)
            return
        self.partitions[access].append(_child_snippet(self.indent, item))

    def render(self) -> str:
        prefix = self.indent.indenting()
        out = [prefix + self.header]
        for access in ACCESS_ORDER:
            snippets = self.partitions[access]
            if not snippets:
                continue
            # Labels sit one literal space in, regardless of indent size.
            out.append(f"{prefix} {access.value}:\n")
            out.extend(s.render() for s in snippets)
        out.append(prefix + self.footer)
        return "".join(out)

    def increase_indent(self, delta: int = 1) -> None:
        for snippets in self.partitions.values():
            for snippet in snippets:
                snippet.increase_indent(delta)
        self.indent.increase(delta)
