import pytest

from cppcodegen.model import AccessSpecifier, Block, ClassBlock, Kind, Snippet
from cppcodegen.types import mk_node, mk_nodes, render_all


def test_spec_matches_hand_built_tree() -> None:
    spec = {
        "kind": "namespace",
        "name": "demo",
        "children": [
            {"kind": "class", "name": "Foo", "public": ["Foo();"], "private": ["int x_;"]},
            "",
            {"kind": "definition", "declaration": "int Foo::x()", "children": ["return x_;"]},
        ],
    }
    cls: ClassBlock = ClassBlock("Foo")
    cls.add("Foo();", AccessSpecifier.PUBLIC)
    cls.add("int x_;")
    fn: Block = Block.definition("int Foo::x()")
    fn.add("return x_;")
    ns: Block = Block.namespace("demo")
    ns.add([cls, "", fn])
    assert mk_node(spec).render() == ns.render()


def test_snippet_kinds() -> None:
    inc = mk_node({"kind": "local_include", "base_path": "gen/", "lines": ["a.h"]})
    assert isinstance(inc, Snippet)
    assert inc.kind is Kind.LOCAL_INCLUDE
    assert inc.render() == '#include "gen/a.h"\n'


def test_level_and_indent_size() -> None:
    node = mk_node({"kind": "code_block", "level": 1, "children": ["x"]}, size=4)
    assert node.render() == "    {\n        x\n    }\n"


def test_document_settings_and_override() -> None:
    doc = {"indent_size": 4, "nodes": [{"kind": "code_block", "children": ["x"]}]}
    assert render_all(mk_nodes(doc)) == "{\n    x\n}\n"
    assert render_all(mk_nodes(doc, size=1, fill="\t")) == "{\n\tx\n}\n"


def test_unknown_kind() -> None:
    with pytest.raises(ValueError, match="Unknown node kind"):
        mk_node({"kind": "enum"})


def test_missing_required_key() -> None:
    with pytest.raises(ValueError, match="requires 'declaration'"):
        mk_node({"kind": "definition"})
    with pytest.raises(ValueError, match="requires 'name'"):
        mk_node({"kind": "class"})


def test_bad_class_keyword() -> None:
    with pytest.raises(ValueError, match="Unsupported class keyword"):
        mk_node({"kind": "class", "name": "U", "keyword": "union"})


def test_non_object_node() -> None:
    with pytest.raises(ValueError, match="must be an object"):
        mk_node(["x"])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "spec, key",
    [
        ({"kind": "line", "lines": [1]}, "lines"),
        ({"kind": "line", "lines": "abc"}, "lines"),
        ({"kind": "namespace", "name": 3}, "name"),
        ({"kind": "definition", "declaration": None}, "declaration"),
        ({"kind": "code_block", "level": "1"}, "level"),
        ({"kind": "code_block", "level": True}, "level"),
        ({"kind": "code_block", "children": "abc"}, "children"),
        ({"kind": "class", "name": "C", "public": "abc"}, "public"),
        ({"kind": "local_include", "base_path": 0}, "base_path"),
    ],
)
def test_wrong_value_types_name_the_key(spec: dict, key: str) -> None:
    with pytest.raises(ValueError, match=f"'{key}"):
        mk_node(spec)  # type: ignore[arg-type]


def test_non_object_child() -> None:
    with pytest.raises(ValueError, match="must be an object or a string"):
        mk_node({"kind": "code_block", "children": [5]})


def test_unknown_class_key() -> None:
    with pytest.raises(ValueError, match="publik"):
        mk_node({"kind": "class", "name": "C", "publik": ["int x;"]})  # type: ignore[typeddict-unknown-key]


def test_document_setting_types() -> None:
    with pytest.raises(ValueError, match="'indent_size'"):
        mk_nodes({"indent_size": "2"})  # type: ignore[typeddict-item]
    with pytest.raises(ValueError, match="'nodes'"):
        mk_nodes({"nodes": {"kind": "line"}})  # type: ignore[typeddict-item]
