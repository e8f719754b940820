"""Tests for the reactive compiler: AST to markup tree."""

import logging

import pytest

from cdl import (
    CDLReferenceError,
    CompilerOptions,
    Const,
    Document,
    Fn,
    Statement,
    WidgetKind,
    compile_document,
    parse_document,
    render,
)
from cdl.codegen import ReactiveCompiler
from cdl.markup import Element, Text, serialize


def test_const_compiles_to_single_element(compile_cdl, scripts):
    tree = compile_cdl('x: text-input = "hello"')

    assert len(tree) == 1
    node = tree[0]
    assert node.tag == "input"
    assert node.attributes == [("type", "text"), ("id", "x"), ("value", "hello")]
    assert node.children == []
    assert scripts(tree) == []
    assert serialize(tree) == '<input type="text" id="x" value="hello"></input>'


@pytest.mark.parametrize(
    "keyword, tag, baseline",
    [
        ("text-input", "input", [("type", "text")]),
        ("text-area", "textarea", []),
        ("paragraph", "p", []),
        ("radio", "input", [("type", "radio")]),
    ],
)
def test_const_uses_widget_tag_and_baseline_attributes(compile_cdl, keyword, tag, baseline):
    node = compile_cdl(f"v: {keyword} = 1")[0]

    assert node.tag == tag
    assert node.attributes == baseline + [("id", "v"), ("value", "1")]


def test_const_literal_quotes_are_escaped(compile_cdl, parse_html):
    tree = compile_cdl(r'quote: text-input = "say \"hi\" & <bye>"')

    assert tree[0].get_attribute("value") == "say &quot;hi&quot; &amp; &lt;bye&gt;"
    assert parse_html(serialize(tree)) == [
        ("input", {"type": "text", "id": "quote", "value": 'say "hi" & <bye>'})
    ]


def test_fn_emits_one_listener_per_input(compile_cdl, scripts):
    tree = compile_cdl("y: paragraph = (a, b) => a + b")

    assert [node.tag for node in tree] == ["script", "script", "p"]
    assert tree[2].attributes == [("id", "y")]
    assert tree[2].children == []

    read_a = 'document.getElementById("a").value'
    read_b = 'document.getElementById("b").value'
    first, second = scripts(tree)
    assert first == (
        '\ndocument.getElementById("a").addEventListener("input", function(event) {\n'
        f'  document.getElementById("y").innerHTML = {read_a} + {read_b};\n'
        "});\n"
    )
    assert second.startswith('\ndocument.getElementById("b").addEventListener("input"')
    for body in (first, second):
        assert read_a in body and read_b in body
        assert 'document.getElementById("y").innerHTML = ' in body


@pytest.mark.parametrize(
    "keyword, accessor",
    [
        ("text-input", "value"),
        ("text-area", "value"),
        ("paragraph", "innerHTML"),
        ("radio", "checked"),
    ],
)
def test_fn_writes_through_target_accessor(compile_cdl, scripts, keyword, accessor):
    tree = compile_cdl(f"out: {keyword} = (n) => n > 3")

    (body,) = scripts(tree)
    assert f'document.getElementById("out").{accessor} = document.getElementById("n").value > 3;' in body
    assert tree[-1].get_attribute("id") == "out"


def test_script_bodies_are_not_escaped(compile_cdl):
    tree = compile_cdl('y: paragraph = (a) => "<b>" + a + "</b>"')

    script_text = tree[0].children[0]
    assert isinstance(script_text, Text)
    assert '"<b>" + document.getElementById("a").value + "</b>"' in script_text.content


def test_options_expand_to_store_radios_listeners_and_labels(compile_cdl, scripts):
    tree = compile_cdl('c: radio = ["red","green"]')

    assert [node.tag for node in tree] == [
        "input",
        "input", "script", "label",
        "input", "script", "label",
    ]
    assert tree[0].attributes == [("type", "hidden"), ("id", "c")]
    assert tree[1].attributes == [("type", "radio"), ("name", "c"), ("value", "red"), ("id", "c_red")]
    assert tree[4].attributes == [("type", "radio"), ("name", "c"), ("value", "green"), ("id", "c_green")]
    assert tree[1].get_attribute("name") == tree[4].get_attribute("name")
    assert tree[3].attributes == [("for", "c_red")]
    assert tree[3].children == [Text("red")]
    assert tree[6].children == [Text("green")]

    red, green = scripts(tree)
    assert red == (
        '\ndocument.getElementById("c_red").addEventListener("input", function(event) {\n'
        '  document.getElementById("c").value = "red";\n'
        '  document.getElementById("c").dispatchEvent(new Event("input"));\n'
        "});\n"
    )
    assert 'document.getElementById("c").value = "green";' in green


def test_options_escape_choice_text(compile_cdl, scripts):
    tree = compile_cdl(r'q: radio = ["a \"b\"", "</script>"]')

    assert tree[1].get_attribute("value") == "a &quot;b&quot;"
    assert tree[3].children == [Text('a "b"')]
    assert tree[6].children == [Text("&lt;/script&gt;")]
    first, second = scripts(tree)
    assert 'document.getElementById("q").value = "a \\"b\\"";' in first
    assert "</script>" not in second
    assert '"<\\/script>"' in second


def test_choice_cell_feeds_derived_cell(compile_cdl, scripts):
    tree = compile_cdl('c: radio = ["red", "green"]\nz: paragraph = (c) => c')

    bodies = scripts(tree)
    for radio_listener in bodies[:2]:
        assert 'document.getElementById("c").dispatchEvent(new Event("input"));' in radio_listener
    assert bodies[2] == (
        '\ndocument.getElementById("c").addEventListener("input", function(event) {\n'
        '  document.getElementById("z").innerHTML = document.getElementById("c").value;\n'
        "});\n"
    )
    assert tree[-1].attributes == [("id", "z")]


def test_statement_groups_follow_source_order(compile_cdl):
    source = (
        'total: paragraph = (price, qty) => price * qty\n'
        'size: radio = ["S", "M"]\n'
        'price: text-input = "3"\n'
        'qty: text-input = "2"\n'
    )

    tree = compile_cdl(source)

    ids = [node.get_attribute("id") for node in tree if isinstance(node, Element) and node.get_attribute("id")]
    assert ids == ["total", "size", "size_S", "size_M", "price", "qty"]
    assert len(tree) == 3 + 7 + 1 + 1


def test_compiling_hand_built_document():
    document = Document(
        statements=(
            Statement("a", WidgetKind.TEXT_INPUT, Const("1")),
            Statement("b", WidgetKind.TEXT_AREA, Fn(inputs=("a",), body="a * 2")),
        )
    )

    tree = compile_document(document)

    assert [node.tag for node in tree] == ["input", "script", "textarea"]


def test_custom_event_name(compile_cdl, scripts):
    tree = compile_cdl('c: radio = ["x"]\ny: paragraph = (c) => c', event="change")

    for body in scripts(tree):
        assert '.addEventListener("change", function(event) {' in body
    assert 'dispatchEvent(new Event("change"))' in scripts(tree)[0]


def test_substitution_modes_differ_on_overlapping_names(compile_cdl, scripts):
    source = "y: paragraph = (a) => a + ab"

    (token_body,) = scripts(compile_cdl(source))
    (text_body,) = scripts(compile_cdl(source, substitution="text"))

    assert 'document.getElementById("a").value + ab;' in token_body
    assert 'document.getElementById("a").value + document.getElementById("a").valueb;' in text_body


def test_non_strict_compilation_accepts_undeclared_inputs(compile_cdl):
    tree = compile_cdl("y: paragraph = (a, b) => a + b")

    assert len(tree) == 3


def test_strict_compilation_validates_first():
    with pytest.raises(CDLReferenceError):
        compile_document(
            parse_document("y: paragraph = (a) => a"),
            options=CompilerOptions(strict=True),
        )


def test_compile_statement_rejects_unknown_values():
    compiler = ReactiveCompiler()
    statement = Statement("x", WidgetKind.PARAGRAPH, object())

    with pytest.raises(TypeError):
        compiler.compile_statement(statement)


def test_render_serializes_whole_document():
    html = render('name: text-input = "Ada"\ngreet: paragraph = (name) => "Hi " + name')

    assert html.startswith('<input type="text" id="name" value="Ada"></input><script>')
    assert html.endswith('<p id="greet"></p>')


def test_compile_logs_structured_event(caplog, compile_cdl):
    caplog.set_level(logging.INFO, logger="cdl.codegen")

    compile_cdl('c: radio = ["a", "b"]\ny: paragraph = (c) => c')

    records = [r for r in caplog.records if getattr(r, "cdl_event", None) == "compile"]
    assert len(records) == 1
    assert records[0].cdl_data["statements"] == 2
    assert records[0].cdl_data["scripts"] == 3
    assert records[0].cdl_data["nodes"] == 9
