import pytest

from dupcheck.components import (
    FRAGMENT_TAG,
    ComponentDescriptor,
    JSXNode,
    PropInfo,
    analyze_component,
    compare_components,
    compare_jsx,
    compare_props,
    find_duplicate_components,
)
from dupcheck.config import ComponentConfig
from dupcheck.extractor import iter_named_functions
from dupcheck.hooks import HookSet
from dupcheck.parser import parse_source
from dupcheck.registry import Category, DuplicateRegistry, Occurrence
from dupcheck.styles import StyleSet

BUTTON = """
function Button({ label, onClick, variant = "primary" }) {
  return (
    <button className="btn" onClick={onClick}>
      <span>{label}</span>
    </button>
  );
}
"""


def _component(
    src: str, name: str, filepath: str = "x.jsx"
) -> ComponentDescriptor | None:
    tree = parse_source(src, filepath)
    for fn_name, node in iter_named_functions(tree.root_node):
        if fn_name == name:
            return analyze_component(fn_name, node, filepath, {})
    raise AssertionError(f"function {name} not found")


def _descriptor(name: str, filepath: str, jsx: JSXNode, props=()) -> ComponentDescriptor:
    return ComponentDescriptor(
        filepath=filepath,
        name=name,
        start_line=1,
        props=tuple(props),
        jsx=jsx,
        hooks=HookSet(),
        styles=StyleSet(),
    )


def test_analyze_component_extracts_props_and_jsx() -> None:
    component = _component(BUTTON, "Button")
    assert component is not None
    assert component.start_line == 2
    assert component.props == (
        PropInfo("label", True),
        PropInfo("onClick", True),
        PropInfo("variant", False, "primary"),
    )
    assert component.jsx.tag == "button"
    assert component.jsx.attributes == (("className", "btn"), ("onClick", None))
    assert [child.tag for child in component.jsx.children] == ["span"]


def test_arrow_component_with_typed_props() -> None:
    src = """
export const Card = ({ title, size = 2 }: { title: string; size?: number }) => (
  <div>
    <h2>{title}</h2>
  </div>
);
"""
    component = _component(src, "Card", "card.tsx")
    assert component is not None
    assert component.props == (PropInfo("title", True), PropInfo("size", False, 2))
    assert component.jsx == JSXNode("div", (), (JSXNode("h2"),))


def test_fragment_root() -> None:
    src = "function List() { return <><li /><li /></>; }"
    component = _component(src, "List")
    assert component is not None
    assert component.jsx.tag == FRAGMENT_TAG
    assert component.jsx.children == (JSXNode("li"), JSXNode("li"))


@pytest.mark.parametrize(
    ("src", "name"),
    [
        ("function button() { return <div />; }", "button"),
        ("function Helper() { const x = 1; return x; }", "Helper"),
        ("function Empty() { if (a) { return <div />; } }", "Empty"),
    ],
)
def test_non_components_are_ignored(src: str, name: str) -> None:
    assert _component(src, name) is None


def test_compare_props() -> None:
    a = (PropInfo("label", True), PropInfo("onClick", True))
    b = (PropInfo("label", True), PropInfo("onClick", False))
    assert compare_props(a, a) == 1.0
    assert compare_props(a, b) == pytest.approx(0.5)
    assert compare_props((), ()) == 1.0
    assert compare_props(a, ()) == 0.0


def test_compare_jsx() -> None:
    a = JSXNode("div", (("className", "x"),), (JSXNode("span"),))
    b = JSXNode("div", (("className", "y"),), (JSXNode("span"),))
    assert compare_jsx(a, a) == 1.0
    assert compare_jsx(a, b) == pytest.approx(0.7)
    assert compare_jsx(a, JSXNode("section")) == 0.0


def test_compare_components_identical_without_hooks() -> None:
    a = _component(BUTTON, "Button", "a.jsx")
    b = _component(BUTTON.replace("Button", "PrimaryButton"), "PrimaryButton", "b.jsx")
    assert a is not None and b is not None
    score = compare_components(a, b, ComponentConfig())
    assert score.props == 1.0
    assert score.jsx == 1.0
    # Neither renders hooks, so the hook term adds nothing.
    assert score.hooks == 0.0
    assert score.styles == 1.0
    assert score.overall == pytest.approx(0.8)


def test_disabled_hooks_and_styles_drop_out_of_overall() -> None:
    jsx = JSXNode("div")
    a = _descriptor("A", "a.jsx", jsx, [PropInfo("x", True)])
    b = _descriptor("B", "b.jsx", jsx, [PropInfo("y", True)])
    cfg = ComponentConfig(enable_hooks=False, enable_styles=False)
    score = compare_components(a, b, cfg)
    # props 0, jsx 1, equal weights
    assert score.structural == pytest.approx(0.5)
    assert score.overall == pytest.approx(0.5)


def test_find_duplicate_components() -> None:
    registry = DuplicateRegistry()
    shared = JSXNode("div", (("className", "card"),), (JSXNode("h2"), JSXNode("p")))
    components = [
        _descriptor("Card", "a.jsx", shared, [PropInfo("title", True)]),
        _descriptor("Tile", "b.jsx", shared, [PropInfo("title", True)]),
        _descriptor("Nav", "c.jsx", JSXNode("nav"), [PropInfo("links", True)]),
    ]

    find_duplicate_components(components, ComponentConfig(), registry)

    groups = registry.view(Category.COMPONENTS)
    assert len(groups) == 1
    assert groups[0].representative == "Card"
    assert groups[0].similarity == pytest.approx(0.8)
    assert groups[0].occurrences == [
        Occurrence("a.jsx", "Card"),
        Occurrence("b.jsx", "Tile"),
    ]
