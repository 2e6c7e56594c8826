"""Tests for template formatting, predefined values and markup"""

from datetime import datetime

import pytest

from pipelogger.core.message import Message, MessageContent
from pipelogger.formatters import (
    Computed,
    Literal,
    MarkupRenderer,
    TemplateFormatter,
    as_predefined,
    build_values,
    default_reducer,
    render,
    strip_markup,
)
from pipelogger.formatters.predefined import iso_timestamp


def make_message(line="hello", level=1):
    return Message(
        content=MessageContent(passed_segments=[line], joined_segments=line),
        level=level,
        source_logger="logger0x0",
    )


def convert(value):
    if not isinstance(value, (list, tuple)):
        value = [value]
    return default_reducer(list(value))


class TestReducer:
    """Test segment joining."""

    def test_joins_with_space(self):
        assert default_reducer(["a", "b", "c"]) == "a b c"

    def test_custom_join_char(self):
        assert default_reducer(["a", "b"], "-") == "a-b"

    def test_non_strings_are_json(self):
        assert default_reducer(["n", 1, {"ok": True}, None]) == 'n 1 {"ok": true} null'

    def test_unserializable_falls_back_to_str(self):
        when = datetime(2024, 1, 2, 3, 4, 5)
        assert default_reducer([when]) == '"2024-01-02 03:04:05"'

    def test_empty(self):
        assert default_reducer([]) == ""


class TestPredefinedValues:
    """Test literal and computed placeholder values."""

    def test_literal(self):
        assert Literal("svc").resolve(make_message(), convert) == "svc"

    def test_literal_sequence_is_reduced(self):
        assert Literal(["a", 2]).resolve(make_message(), convert) == "a 2"

    def test_computed_without_argument(self):
        value = Computed(lambda: "now")
        assert value.takes_message is False
        assert value.resolve(make_message(), convert) == "now"

    def test_computed_with_message(self):
        value = Computed(lambda msg: msg.source_logger)
        assert value.takes_message is True
        assert value.resolve(make_message(), convert) == "logger0x0"

    def test_computed_requires_callable(self):
        with pytest.raises(TypeError):
            Computed("not callable")

    def test_as_predefined(self):
        assert isinstance(as_predefined("x"), Literal)
        assert isinstance(as_predefined(lambda: "x"), Computed)
        wrapped = Literal("y")
        assert as_predefined(wrapped) is wrapped

    def test_optional_parameter_is_not_given_message(self):
        value = Computed(lambda tz=None: "tz" if tz is None else "message")
        assert value.takes_message is False
        assert value.resolve(make_message(), convert) == "tz"

    def test_builtin_with_optional_argument(self):
        value = Computed(datetime.now)
        assert value.takes_message is False
        assert str(datetime.now().year) in value.resolve(make_message(), convert)

    def test_var_positional_gets_message(self):
        value = Computed(lambda *args: args[0].source_logger)
        assert value.takes_message is True
        assert value.resolve(make_message(), convert) == "logger0x0"

    def test_iso_timestamp(self):
        stamp = iso_timestamp()
        assert stamp.endswith("Z")
        assert "T" in stamp


class TestTemplateFormatter:
    """Test placeholder substitution."""

    def setup_method(self):
        self.formatter = TemplateFormatter(colored=False)

    def test_msg_only(self):
        assert self.formatter.render("%msg", {"%msg": "X"}) == "X"

    def test_unknown_tokens_pass_through(self):
        result = self.formatter.render("%msg %missing 100%", {"%msg": "X"})
        assert result == "X %missing 100%"

    def test_keys_without_percent(self):
        assert self.formatter.render("[%app] %msg", {"app": "svc", "%msg": "m"}) == "[svc] m"

    def test_token_includes_hyphen_and_underscore(self):
        values = {"%my-val": "a", "%my_val": "b", "%my": "c"}
        assert self.formatter.render("%my-val %my_val %my", values) == "a b c"

    def test_renders_markup_after_substitution(self):
        colored = TemplateFormatter(colored=True)
        result = colored.render("{red %msg}", {"%msg": "boom"})
        assert result == "\033[31mboom\033[0m"

    def test_callable(self):
        assert self.formatter("%msg!", {"%msg": "hi"}) == "hi!"

    def test_strip(self):
        assert self.formatter.strip("\033[31mboom\033[0m") == "boom"


class TestBuildValues:
    """Test substitution table precedence."""

    def test_precedence(self):
        values = build_values(
            "line",
            {"a": "persistent", "b": "persistent"},
            {"b": "local"},
            make_message(),
            convert,
        )
        assert values == {"%msg": "line", "%a": "persistent", "%b": "local"}

    def test_predefined_can_override_msg(self):
        values = build_values("line", {"msg": "other"}, None, make_message(), convert)
        assert values["%msg"] == "other"

    def test_computed_values_see_message(self):
        values = build_values(
            "line", {"lvl": lambda msg: msg.level}, None, make_message(level=8), convert
        )
        assert values["%lvl"] == "8"


class TestMarkup:
    """Test style markup rendering."""

    def test_plain_text_unchanged(self):
        assert render("no markup here") == "no markup here"

    def test_single_style(self):
        assert render("{gray [date]}") == "\033[90m[date]\033[0m"

    def test_chained_styles(self):
        assert render("{bold.red x}") == "\033[1;31mx\033[0m"

    def test_nested_styles_restore_outer(self):
        result = render("{red a {bold b} c}")
        assert result == "\033[31ma \033[1mb\033[0m\033[31m c\033[0m"

    def test_uncolored_removes_syntax(self):
        assert render("%s {gray [x]} {bold.red y}", colored=False) == "%s [x] y"

    def test_unknown_style_kept_verbatim(self):
        assert render("{foo bar}") == "{foo bar}"

    def test_json_braces_kept(self):
        text = '{"a": {"b": 1}}'
        assert render(text) == text

    def test_escaped_braces(self):
        assert render("\\{red x\\}") == "{red x}"

    def test_unclosed_block_kept_verbatim(self):
        assert render("{red open") == "{red open"
        assert render("{red open", colored=False) == "{red open"

    def test_unclosed_outer_block_keeps_closed_inner(self):
        assert render("{red a {bold b} c") == "{red a \033[1mb\033[0m c"

    def test_unclosed_user_text_survives_strip(self):
        formatter = TemplateFormatter(colored=True)
        rendered = formatter.render("{gray [x]} %msg", {"%msg": "{red unclosed"})
        assert formatter.strip(rendered) == "[x] {red unclosed"

    def test_strip_markup(self):
        assert strip_markup(render("{bold.gray a} b")) == "a b"

    def test_renderer_repr(self):
        assert "colored=False" in repr(MarkupRenderer(colored=False))
