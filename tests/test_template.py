"""Tests for linkway.routing.template — sanitizing, parsing, compiling."""

import pytest

from linkway.errors import InvalidPattern
from linkway.routing.template import (
    PathSegment,
    RouteTemplate,
    compile_template,
    parse_pattern,
    sanitize_path,
)


class UserScreen:
    pass


class TestSanitizePath:
    def test_strips_slashes(self) -> None:
        assert sanitize_path("/user/42/") == "user/42"

    def test_strips_whitespace(self) -> None:
        assert sanitize_path("  user/42  ") == "user/42"

    def test_collapses_repeated_slashes(self) -> None:
        assert sanitize_path("user//42///tab") == "user/42/tab"

    def test_empty_and_none(self) -> None:
        assert sanitize_path(None) == ""
        assert sanitize_path("") == ""
        assert sanitize_path("/") == ""

    def test_keeps_case(self) -> None:
        assert sanitize_path("/User/Profile") == "User/Profile"


class TestParsePattern:
    def test_literal(self) -> None:
        segments = parse_pattern("user")
        assert segments == [PathSegment("user")]

    def test_placeholder(self) -> None:
        segments = parse_pattern("user/:id")
        assert len(segments) == 2
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].value == ":id"

    def test_multiple_placeholders(self) -> None:
        segments = parse_pattern("user/:id/:tab")
        assert [s.param_name for s in segments] == [None, "id", "tab"]

    def test_bare_marker_rejected(self) -> None:
        with pytest.raises(InvalidPattern, match="placeholder without a name"):
            parse_pattern("user/:")

    def test_repeated_placeholder_rejected(self) -> None:
        with pytest.raises(InvalidPattern, match="appears twice"):
            parse_pattern("compare/:id/:id")


class TestPathSegment:
    def test_literal_matches_case_insensitively(self) -> None:
        seg = PathSegment("user")
        assert seg.matches("USER")
        assert not seg.matches("users")

    def test_placeholder_matches_anything(self) -> None:
        seg = PathSegment(":id", is_param=True, param_name="id")
        assert seg.matches("42")
        assert seg.matches("anything")

    def test_frozen(self) -> None:
        seg = PathSegment("user")
        with pytest.raises(AttributeError):
            seg.value = "other"  # type: ignore[misc]


class TestCompileTemplate:
    def test_normalizes_pattern(self) -> None:
        template = compile_template("/user/:id/", UserScreen, {"id"}, {"ref"})
        assert template.pattern == "user/:id"
        assert template.handler is UserScreen
        assert template.route_param_names == frozenset({"id"})
        assert template.query_param_names == frozenset({"ref"})
        assert template.placeholders == ("id",)
        assert template.is_default is False

    def test_key_is_lowercase(self) -> None:
        template = compile_template("User/:ID", UserScreen)
        assert template.pattern == "User/:ID"
        assert template.key == "user/:id"

    def test_default_route(self) -> None:
        for pattern in (None, "", "/"):
            template = compile_template(pattern, UserScreen)
            assert template.is_default is True
            assert template.pattern == ""
            assert template.segments == ()

    def test_default_route_rejects_route_params(self) -> None:
        with pytest.raises(InvalidPattern, match="default route"):
            compile_template(None, UserScreen, {"id"})

    def test_declared_route_param_must_be_placeholder(self) -> None:
        with pytest.raises(InvalidPattern, match="tab are not in the pattern") as exc_info:
            compile_template("user/:id", UserScreen, {"id", "tab"})
        assert exc_info.value.handler is UserScreen

    def test_parse_error_carries_handler(self) -> None:
        with pytest.raises(InvalidPattern) as exc_info:
            compile_template("user/:", UserScreen)
        assert exc_info.value.handler is UserScreen
        assert exc_info.value.pattern == "user/:"

    def test_handler_name(self) -> None:
        assert compile_template("user", UserScreen).handler_name == "UserScreen"
        assert compile_template("user", "com.app.UserScreen").handler_name == "com.app.UserScreen"

    def test_frozen(self) -> None:
        template = compile_template("user", UserScreen)
        with pytest.raises(AttributeError):
            template.pattern = "other"  # type: ignore[misc]

    def test_equal_templates(self) -> None:
        assert compile_template("user/:id", UserScreen) == RouteTemplate(
            "user/:id",
            UserScreen,
            (PathSegment("user"), PathSegment(":id", is_param=True, param_name="id")),
        )
