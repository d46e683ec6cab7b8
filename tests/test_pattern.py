"""Tests for routefile.routing.pattern — path template compiler."""

import pytest

from routefile.errors import PatternError
from routefile.routing.pattern import (
    compile_segments,
    join_prefix,
    parse_path,
    split_path,
    split_template,
)


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/home")
        assert len(segments) == 1
        assert segments[0].value == "home"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        segments = parse_path("/api/v2/users")
        assert [s.value for s in segments] == ["api", "v2", "users"]

    def test_param(self) -> None:
        segments = parse_path("/page/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].constraint is None
        assert segments[1].pattern == "[^/]+"

    def test_constrained_param(self) -> None:
        segments = parse_path("/customer/{<[0-9]+>customerid}")
        assert segments[1].param_name == "customerid"
        assert segments[1].constraint == "[0-9]+"

    def test_constraint_with_braces(self) -> None:
        segments = parse_path("/archive/{<[0-9]{4}>year}")
        assert segments[1].param_name == "year"
        assert segments[1].constraint == "[0-9]{4}"

    def test_constraint_with_angle_bracket(self) -> None:
        segments = parse_path("/x/{<(?P<n>[a-z]+)>word}")
        assert segments[1].param_name == "word"
        assert segments[1].constraint == "(?P<n>[a-z]+)"

    def test_constraint_with_slash(self) -> None:
        segments = parse_path("/u/{<[^/]+>name}")
        assert len(segments) == 2
        assert segments[1].param_name == "name"
        assert segments[1].constraint == "[^/]+"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_order_preserved(self) -> None:
        segments = parse_path("/a/{x}/b/{y}")
        assert [s.param_name or s.value for s in segments] == ["a", "x", "b", "y"]

    @pytest.mark.parametrize(
        "template",
        [
            "/page/{id",
            "/page/id}",
            "/page/{a}b}",
            "/page/x{id}",
            "/page/{}",
            "/page/{<[0-9]+>}",
            "/page/{<>id}",
            "/page/{<[0-9]+id}",
            "/page/{my-id}",
        ],
    )
    def test_rejects_malformed(self, template: str) -> None:
        with pytest.raises(PatternError):
            parse_path(template)

    def test_rejects_duplicate_param(self) -> None:
        with pytest.raises(PatternError, match="Duplicate parameter name 'id'"):
            parse_path("/x/{id}/{id}")

    def test_rejects_duplicate_param_with_constraint(self) -> None:
        with pytest.raises(PatternError, match="Duplicate"):
            parse_path("/x/{id}/{<[0-9]+>id}")


class TestCompileSegments:
    def test_static_exact(self) -> None:
        matcher = compile_segments(parse_path("/page/home"))
        assert matcher(("page", "home")) == ()
        assert matcher(("page", "Home")) is None

    def test_count_mismatch(self) -> None:
        matcher = compile_segments(parse_path("/page/{id}"))
        assert matcher(("page",)) is None
        assert matcher(("page", "a", "b")) is None

    def test_captures_in_order(self) -> None:
        matcher = compile_segments(parse_path("/u/{user}/p/{post}"))
        assert matcher(("u", "alice", "p", "7")) == ("alice", "7")

    def test_constraint_is_anchored(self) -> None:
        matcher = compile_segments(parse_path("/customer/{<[0-9]+>id}"))
        assert matcher(("customer", "42")) == ("42",)
        assert matcher(("customer", "42abc")) is None
        assert matcher(("customer", "abc42")) is None

    def test_invalid_regex(self) -> None:
        with pytest.raises(PatternError, match="Invalid constraint"):
            compile_segments(parse_path("/x/{<[0-9>id}"))

    def test_slash_in_constraint_matches_one_segment(self) -> None:
        matcher = compile_segments(parse_path("/u/{<[^/]+>name}/{<a/b|c>x}"))
        assert matcher(("u", "bob", "c")) == ("bob", "c")
        assert matcher(("u", "bob")) is None

    def test_oversized_repeat_count(self) -> None:
        with pytest.raises(PatternError, match="Invalid constraint"):
            compile_segments(parse_path("/x/{<a{4294967296}>id}"))

    def test_root_matches_empty(self) -> None:
        matcher = compile_segments(parse_path("/"))
        assert matcher(()) == ()
        assert matcher(("x",)) is None


class TestSplitPath:
    def test_ignores_outer_slashes(self) -> None:
        assert split_path("/a/b/") == ("a", "b")

    def test_root(self) -> None:
        assert split_path("/") == ()
        assert split_path("") == ()


class TestSplitTemplate:
    def test_keeps_slash_inside_braces(self) -> None:
        assert split_template("/u/{<[^/]+>name}/x") == ("u", "{<[^/]+>name}", "x")

    def test_plain_template(self) -> None:
        assert split_template("//a/{id}/") == ("a", "{id}")


class TestJoinPrefix:
    def test_no_prefix(self) -> None:
        assert join_prefix("", "/home") == "/home"

    @pytest.mark.parametrize("prefix", ["/app", "/app/", "app"])
    def test_prefix_normalised(self, prefix: str) -> None:
        assert join_prefix(prefix, "/home") == "/app/home"

    def test_root_template(self) -> None:
        assert join_prefix("/app", "/") == "/app"
