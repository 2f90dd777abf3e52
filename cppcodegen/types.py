from __future__ import annotations

import logging
from typing import Any, Iterable, NotRequired, TypedDict, Union

from .indent import DEFAULT_FILL_CHAR, DEFAULT_INDENT_SIZE, Indent
from .model import ACCESS_ORDER, Block, ClassBlock, Kind, Renderable, Snippet

logger = logging.getLogger(__name__)


class SnippetSpec(TypedDict):
    kind: str
    lines: NotRequired[list[str]]
    base_path: NotRequired[str]
    level: NotRequired[int]


class BlockSpec(TypedDict):
    kind: str
    declaration: NotRequired[str]
    name: NotRequired[str]
    children: NotRequired[list["ChildSpec"]]
    level: NotRequired[int]


class ClassSpec(TypedDict):
    kind: str
    name: str
    keyword: NotRequired[str]
    public: NotRequired[list["ChildSpec"]]
    protected: NotRequired[list["ChildSpec"]]
    private: NotRequired[list["ChildSpec"]]
    level: NotRequired[int]


NodeSpec = Union[SnippetSpec, BlockSpec, ClassSpec]
ChildSpec = Union[str, NodeSpec]


class DocumentSpec(TypedDict, total=False):
    indent_size: int
    fill: str
    nodes: list[NodeSpec]


SNIPPET_KINDS: tuple[Kind, ...] = (Kind.LINE, Kind.SYSTEM_INCLUDE, Kind.LOCAL_INCLUDE)
BLOCK_KINDS: tuple[Kind, ...] = (Kind.CODE_BLOCK, Kind.DEFINITION, Kind.NAMESPACE)
CLASS_KEYWORDS: tuple[str, ...] = ("class", "struct")
CLASS_KEYS: frozenset[str] = frozenset({"kind", "name", "keyword", "level"} | {a.value for a in ACCESS_ORDER})


def _require(spec: dict[str, Any], key: str) -> Any:
    if key not in spec:
        raise ValueError(f"Node of kind '{spec.get('kind')}' requires '{key}'")
    return spec[key]


def _check(spec: dict[str, Any], key: str, value: Any, expected: type) -> Any:
    # bool is an int subclass but never a valid level or size
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ValueError(
            f"'{key}' of node kind '{spec.get('kind')}' must be {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _get_str(spec: dict[str, Any], key: str, default: str | None = None) -> str:
    value = _require(spec, key) if default is None else spec.get(key, default)
    return _check(spec, key, value, str)


def _get_list(spec: dict[str, Any], key: str) -> list[Any]:
    return _check(spec, key, spec.get(key, []), list)


def _parse_kind(raw: Any) -> Kind:
    try:
        return Kind(raw)
    except (ValueError, TypeError):
        allowed = ", ".join(k.value for k in Kind)
        raise ValueError(f"Unknown node kind {raw!r}. Allowed: {allowed}") from None


def _mk_child(child: ChildSpec, size: int, fill: str) -> str | Renderable:
    if isinstance(child, str):
        return child
    return mk_node(child, size, fill)


def mk_snippet(spec: SnippetSpec, indent: Indent) -> Snippet:
    kind = _parse_kind(spec["kind"])
    base_path = _get_str(spec, "base_path", "") if kind is Kind.LOCAL_INCLUDE else ""
    snippet = Snippet(kind, indent, base_path)
    lines = _get_list(spec, "lines")
    for line in lines:
        _check(spec, "lines[]", line, str)
    snippet.add_lines(lines)
    return snippet


def mk_block(spec: BlockSpec, indent: Indent) -> Block:
    kind = _parse_kind(spec["kind"])
    if kind is Kind.DEFINITION:
        block = Block.definition(_get_str(spec, "declaration"), indent)
    elif kind is Kind.NAMESPACE:
        block = Block.namespace(_get_str(spec, "name"), indent)
    else:
        block = Block.code_block(indent)
    for child in _get_list(spec, "children"):
        block.add(_mk_child(child, indent.size, indent.character))
    return block


def mk_class(spec: ClassSpec, indent: Indent) -> ClassBlock:
    unknown = sorted(set(spec) - CLASS_KEYS)
    if unknown:
        raise ValueError(f"Unknown key(s) {unknown} in class spec. Allowed: {sorted(CLASS_KEYS)}")
    keyword = _get_str(spec, "keyword", "class")
    if keyword not in CLASS_KEYWORDS:
        raise ValueError(f"Unsupported class keyword '{keyword}'. Allowed: {CLASS_KEYWORDS}")
    cls = ClassBlock(_get_str(spec, "name"), indent, keyword)
    for access in ACCESS_ORDER:
        for child in _get_list(spec, access.value):
            cls.add(_mk_child(child, indent.size, indent.character), access)
    return cls


def mk_node(
    spec: NodeSpec,
    size: int = DEFAULT_INDENT_SIZE,
    fill: str = DEFAULT_FILL_CHAR,
) -> Snippet | Block | ClassBlock:
    """Build a node tree from a plain-dict description (e.g. decoded JSON).

    Malformed specs raise ``ValueError`` naming the offending key.
    """
    if not isinstance(spec, dict):
        raise ValueError(f"Node spec must be an object or a string, got {type(spec).__name__}")
    kind = _parse_kind(_require(spec, "kind"))
    level = _check(spec, "level", spec.get("level", 0), int)
    indent = Indent(level, size, fill)
    logger.debug("Building %s node at level %d", kind.value, indent.level)
    if kind in SNIPPET_KINDS:
        return mk_snippet(spec, indent)  # type: ignore[arg-type]
    if kind in BLOCK_KINDS:
        return mk_block(spec, indent)  # type: ignore[arg-type]
    return mk_class(spec, indent)  # type: ignore[arg-type]


def mk_nodes(
    doc: DocumentSpec,
    size: int | None = None,
    fill: str | None = None,
) -> list[Snippet | Block | ClassBlock]:
    """Build every top-level node of a document; explicit ``size``/``fill`` win over the document's."""
    settings: dict[str, Any] = {"kind": "document", **doc}
    if size is None:
        size = _check(settings, "indent_size", doc.get("indent_size", DEFAULT_INDENT_SIZE), int)
    if fill is None:
        fill = _check(settings, "fill", doc.get("fill", DEFAULT_FILL_CHAR), str)
    return [mk_node(spec, size, fill) for spec in _get_list(settings, "nodes")]


def render_all(nodes: Iterable[Renderable]) -> str:
    return "".join(node.render() for node in nodes)
