"""Tests for wren.cli — CLI entrypoint, argument parsing, and ``wren routes``."""

import json
import sys
import types

import pytest

from wren.cli import main
from wren.routing.group import RuleGroup
from wren.routing.resource import Resource
from wren.routing.router import Router


def _install_module(monkeypatch: pytest.MonkeyPatch, **attrs: object) -> str:
    module = types.ModuleType("wren_cli_fixture")
    for name, value in attrs.items():
        setattr(module, name, value)
    monkeypatch.setitem(sys.modules, "wren_cli_fixture", module)
    return "wren_cli_fixture"


def _router() -> Router:
    router = Router()
    router.rule("health", "status/ping", "GET")
    router.resource("blog", "app/blog", only=["index", "read"], model={"read": "Post"})
    return router


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_routes_missing_router(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "wren" in capsys.readouterr().out


class TestRoutesCommand:
    def test_table(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        module = _install_module(monkeypatch, router=_router())
        main(["routes", module])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["VERB", "PATH", "TARGET"]
        assert "health" in lines[2]
        assert "app/blog/index (complete)" in out
        assert "blog/<id>" in out
        assert "model='Post'" in out

    def test_bare_rule_group(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = RuleGroup()
        api = root.group("api")
        api.add_rule("health", "status/ping", "GET")
        Resource(None, api, "blog", "app/blog").only(["read"])
        module = _install_module(monkeypatch, tree=root)
        main(["routes", f"{module}:tree", "--json"])
        rules = json.loads(capsys.readouterr().out)
        assert [(r["verb"], r["path"]) for r in rules] == [
            ("GET", "api/health"),
            ("GET", "api/blog/<id>"),
        ]

    def test_callable_is_not_called(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        module = _install_module(monkeypatch, router=_router)
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", module])
        assert exc_info.value.code == 1
        assert "expected a wren Router or RuleGroup" in capsys.readouterr().err

    def test_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        module = _install_module(monkeypatch, router=_router())
        main(["routes", module, "--json"])
        rules = json.loads(capsys.readouterr().out)
        assert [r["path"] for r in rules] == ["health", "blog", "blog/<id>"]
        assert rules[2]["model"] == "Post"
        assert rules[1]["complete_match"] is True
        assert rules[0]["domain"] == "-"

    def test_empty_router(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        module = _install_module(monkeypatch, router=Router())
        main(["routes", module])
        assert "No rules registered." in capsys.readouterr().out

    def test_not_a_router(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        module = _install_module(monkeypatch, router="nope")
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", module])
        assert exc_info.value.code == 1
        assert "is a str; expected a wren Router or RuleGroup" in capsys.readouterr().err

    def test_missing_module(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "wren_no_such_module_xyz:router"])
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err

    def test_compile_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        router = Router()
        router.resource("blog.comment", "t", rest={"feed": ("GET", "feed", "feed")})
        module = _install_module(monkeypatch, router=router)
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", module])
        assert exc_info.value.code == 1
        assert "must start with '/'" in capsys.readouterr().err
