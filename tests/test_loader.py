"""Tests for routefile.routing.loader — route file parsing and table building."""

import logging
from pathlib import Path

import pytest

from routefile.errors import ActionSyntaxError, PatternError, RouteFileError
from routefile.routing.loader import HTTP_METHODS, find_shadowed, load, load_file

ROUTES = """
# Pages
GET     /home                           PageController.showPage(id:'home')
GET     /page/{id}                      PageController.showPage

    # indented comment
POST    /customer/{<[0-9]+>customerid}  CustomerController.createCustomer
"""


class TestLoad:
    def test_builds_routes_in_order(self) -> None:
        table = load(ROUTES)
        assert len(table) == 3
        assert [r.path for r in table] == [
            "/home",
            "/page/{id}",
            "/customer/{<[0-9]+>customerid}",
        ]

    def test_order_ignores_comments_and_blanks(self) -> None:
        table = load(ROUTES)
        assert [r.order for r in table] == [0, 1, 2]

    def test_records_source_line(self) -> None:
        table = load(ROUTES)
        assert [r.line for r in table] == [3, 4, 7]

    def test_action_parsed(self) -> None:
        first = load(ROUTES).routes[0]
        assert first.action.reference == "PageController.showPage"
        assert first.action.static_args == {"id": "home"}

    def test_method_case_insensitive(self) -> None:
        table = load("get /a A.b\nPost /b A.c")
        assert [r.method for r in table] == ["GET", "POST"]

    def test_all_methods_accepted(self) -> None:
        source = "\n".join(f"{m} /x{i} A.b" for i, m in enumerate(sorted(HTTP_METHODS)))
        assert len(load(source)) == len(HTTP_METHODS)

    def test_action_with_spaces_in_args(self) -> None:
        table = load("GET /a Page.show(a:'1', b:'2')")
        assert table.routes[0].action.static_args == {"a": "1", "b": "2"}

    def test_arrow_separator_tolerated(self) -> None:
        table = load("GET /page/{id} -> Page.show")
        assert table.routes[0].action.reference == "Page.show"

    def test_empty_source(self) -> None:
        table = load("# nothing here\n\n")
        assert len(table) == 0
        assert table.shadowed == ()


class TestPrefix:
    def test_prefix_prepended(self) -> None:
        table = load("GET /home A.b", prefix="/myservlet")
        assert table.routes[0].path == "/myservlet/home"
        assert table.prefix == "/myservlet"

    def test_prefix_used_for_matching(self) -> None:
        table = load("GET /home A.b", prefix="/myservlet")
        assert table.match("GET", "/myservlet/home")
        assert not table.match("GET", "/home")


class TestLoadErrors:
    def test_unknown_method(self) -> None:
        with pytest.raises(RouteFileError, match="Unknown HTTP method 'FETCH'") as exc_info:
            load("GET /a A.b\nFETCH /b A.c")
        assert exc_info.value.line == 2
        assert exc_info.value.text == "FETCH /b A.c"

    def test_missing_column(self) -> None:
        with pytest.raises(RouteFileError, match="METHOD PATH ACTION"):
            load("GET /a")

    def test_duplicate_param_is_fatal(self) -> None:
        with pytest.raises(RouteFileError) as exc_info:
            load("GET /ok A.b\nGET /x/{id}/{id} Foo.bar")
        assert exc_info.value.line == 2
        assert isinstance(exc_info.value.__cause__, PatternError)

    def test_unbalanced_brace(self) -> None:
        with pytest.raises(RouteFileError, match="Unbalanced"):
            load("GET /x/{id A.b")

    def test_invalid_regex(self) -> None:
        with pytest.raises(RouteFileError, match="Invalid constraint"):
            load("GET /x/{<(>id} A.b")

    def test_oversized_repeat_count(self) -> None:
        with pytest.raises(RouteFileError, match="Invalid constraint") as exc_info:
            load("GET /ok A.b\nGET /x/{<a{4294967296}>id} A.c")
        assert exc_info.value.line == 2
        assert isinstance(exc_info.value.__cause__, PatternError)

    def test_slash_inside_constraint(self) -> None:
        table = load("GET /u/{<[^/]+>name} Users.show")
        result = table.match("GET", "/u/bob")
        assert result
        assert result.path_params == {"name": "bob"}

    def test_malformed_action(self) -> None:
        with pytest.raises(RouteFileError) as exc_info:
            load("GET /x Controller")
        assert isinstance(exc_info.value.__cause__, ActionSyntaxError)

    def test_message_has_line_number(self) -> None:
        with pytest.raises(RouteFileError, match=r"^routes:3: "):
            load("GET /a A.b\n\nBAD /b A.c")


class TestLoadFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.conf"
        path.write_text(ROUTES, encoding="utf-8")
        table = load_file(path, prefix="/app")
        assert len(table) == 3
        assert table.routes[0].path == "/app/home"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RouteFileError, match="Cannot read route file") as exc_info:
            load_file(tmp_path / "nope.conf")
        assert exc_info.value.line is None
        assert isinstance(exc_info.value.__cause__, OSError)


class TestShadowLint:
    def test_param_before_literal_is_shadowed(self) -> None:
        table = load("GET /page/{id} A.b\nGET /page/home A.c")
        assert len(table.shadowed) == 1
        record = table.shadowed[0]
        assert record.route.path == "/page/home"
        assert record.shadowed_by.path == "/page/{id}"

    def test_literal_before_param_not_shadowed(self) -> None:
        table = load("GET /page/home A.b\nGET /page/{id} A.c")
        assert table.shadowed == ()

    def test_exact_duplicate(self) -> None:
        table = load("GET /a A.b\nGET /a A.c")
        assert [r.route.order for r in table.shadowed] == [1]

    def test_different_method_not_shadowed(self) -> None:
        table = load("GET /a A.b\nPOST /a A.c")
        assert table.shadowed == ()

    def test_wildcard_method_shadows(self) -> None:
        table = load("* /a A.b\nPOST /a A.c")
        assert len(table.shadowed) == 1

    def test_constraint_covers_matching_literal(self) -> None:
        table = load("GET /n/{<[0-9]+>id} A.b\nGET /n/42 A.c\nGET /n/abc A.d")
        assert [r.route.path for r in table.shadowed] == ["/n/42"]

    def test_narrower_constraint_not_flagged(self) -> None:
        table = load("GET /n/{<[0-9]+>id} A.b\nGET /n/{id} A.c")
        assert table.shadowed == ()

    def test_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="routefile.routing"):
            load("GET /page/{id} A.b\nGET /page/home A.c")
        assert "Unreachable route" in caplog.text
        assert "/page/home" in caplog.text

    def test_find_shadowed_directly(self) -> None:
        table = load("GET /a A.b")
        assert find_shadowed(table.routes) == []
