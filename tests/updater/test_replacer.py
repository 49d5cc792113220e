import re

import pytest

from arginfoUpdater.replacer import (
    BlockLocator,
    locate_block,
    normalize_escapes,
    replace_blocks,
)

OLD_FOO = (
    "ZEND_BEGIN_ARG_INFO_EX(arginfo_foo, 0, 0, 1)\n"
    "    ZEND_ARG_INFO(0, a)\n"
    "ZEND_END_ARG_INFO()"
)
NEW_FOO = (
    "ZEND_BEGIN_ARG_WITH_RETURN_TYPE_INFO_EX(arginfo_foo, 0, 2, IS_VOID, 0)\n"
    "    ZEND_ARG_TYPE_INFO(0, a, IS_LONG, 0)\n"
    "    ZEND_ARG_TYPE_INFO(0, b, IS_LONG, 0)\n"
    "ZEND_END_ARG_INFO()"
)

SOURCE = f"#include \"php.h\"\n\n{OLD_FOO}\n\nPHP_FUNCTION(foo)\n{{\n}}\n"


def test_locate_bracketed_block_does_not_match_prefix_names():
    text = OLD_FOO.replace("arginfo_foo", "arginfo_foobar") + "\n" + OLD_FOO
    assert locate_block("arginfo_foo", text) == OLD_FOO


def test_locate_define_block():
    text = "#define arginfo_bar arginfo_foo\nint x;\n"
    assert locate_block("arginfo_bar", text) == "#define arginfo_bar arginfo_foo"
    assert locate_block("arginfo_baz", text) is None


def test_replace_changed_block():
    result = replace_blocks(SOURCE, f"/* generated */\n{NEW_FOO}\n", ["arginfo_foo"])
    assert result.replaced == 1
    assert NEW_FOO in result.text
    assert OLD_FOO not in result.text
    assert result.text.endswith("PHP_FUNCTION(foo)\n{\n}\n")


def test_identical_block_is_left_alone():
    result = replace_blocks(SOURCE, OLD_FOO, ["arginfo_foo"])
    assert result.replaced == 0
    assert result.text == SOURCE


def test_namespaced_class_backslash_is_hex_escaped():
    generated = r"    ZEND_ARG_OBJ_INFO(0, handler, Swow\\Utils\\Handler, 0)"
    assert normalize_escapes(generated) == (
        r"    ZEND_ARG_OBJ_INFO(0, handler, Swow\x5cUtils\\Handler, 0)"
    )
    assert normalize_escapes(r"Swow\\Xml\\unit") == r"Swow\x5cXml\x5cunit"


def test_block_already_hex_escaped_is_unchanged():
    old = (
        "ZEND_BEGIN_ARG_WITH_RETURN_OBJ_INFO_EX(arginfo_swow_get, 0, 0, Swow\\x5cUtils\\\\Handler, 0)\n"
        "    ZEND_ARG_OBJ_INFO(0, handler, Swow\\x5cUtils\\\\Handler, 0)\n"
        "ZEND_END_ARG_INFO()"
    )
    generated = old.replace("\\x5cU", "\\\\U")
    assert generated != old
    assert normalize_escapes(generated) == old
    assert normalize_escapes(old) == old

    source = f"{old}\n\nPHP_FUNCTION(swow_get)\n{{\n}}\n"
    result = replace_blocks(source, generated, ["arginfo_swow_get"])
    assert result.replaced == 0
    assert result.text == source


def test_missing_names_are_reported():
    warnings: list[str] = []
    result = replace_blocks(
        SOURCE,
        NEW_FOO,
        ["arginfo_missing", "arginfo_class_Foo_bar", "arginfo_foo"],
        non_standard={"arginfo_class_Foo_bar": True},
        warn=warnings.append,
    )
    assert warnings == ["Unable to find target function/method of 'arginfo_missing'"]
    assert result.missing_in_source == ["arginfo_missing"]
    assert result.replaced == 1


def test_missing_in_generated_output_is_skipped():
    warnings: list[str] = []
    result = replace_blocks(SOURCE, "/* empty */\n", ["arginfo_foo"], warn=warnings.append)
    assert warnings == ["Unable to find 'arginfo_foo' in new arginfo source"]
    assert result.missing_in_generated == ["arginfo_foo"]
    assert result.text == SOURCE


def test_block_locator_requires_pattern():
    with pytest.raises(TypeError):
        BlockLocator()

    class SemicolonLocator(BlockLocator):
        def pattern(self, name: str) -> re.Pattern[str]:
            return re.compile(rf"{re.escape(name)};")

    assert locate_block("arginfo_x", "arginfo_x;", [SemicolonLocator()]) == "arginfo_x;"
