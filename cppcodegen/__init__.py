from .indent import Indent, DEFAULT_INDENT_SIZE, DEFAULT_FILL_CHAR
from .model import (
    Kind, AccessSpecifier, ACCESS_ORDER, Renderable, Snippet, Block, ClassBlock,
)
from .types import mk_node, mk_nodes, render_all

__all__ = [
    # indent
    "Indent", "DEFAULT_INDENT_SIZE", "DEFAULT_FILL_CHAR",
    # model
    "Kind", "AccessSpecifier", "ACCESS_ORDER", "Renderable", "Snippet", "Block", "ClassBlock",
    # specs
    "mk_node", "mk_nodes", "render_all",
]
