"""Tests for routefile.cli._resolve — RouterApp import resolution."""

import sys
import types

import pytest

from routefile.cli._resolve import resolve_app
from routefile.dispatch.dispatcher import Dispatcher
from routefile.dispatch.registry import ActionRegistry
from routefile.routing.loader import load
from routefile.server.handler import RouterApp


def _app() -> RouterApp:
    return RouterApp(Dispatcher(load("GET / Index.show"), ActionRegistry()))


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a RouterApp on sys.modules."""
    mod = types.ModuleType("_fake_routefile_app")
    mod.app = _app()  # type: ignore[attr-defined]
    mod.factory = _app  # type: ignore[attr-defined]
    mod.bad_factory = lambda: 1 / 0  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_routefile_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_routefile_app:app"), RouterApp)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        assert isinstance(resolve_app("_fake_routefile_app"), RouterApp)

    def test_factory(self) -> None:
        assert isinstance(resolve_app("_fake_routefile_app:factory"), RouterApp)

    def test_failing_factory(self) -> None:
        with pytest.raises(TypeError, match="raised an error"):
            resolve_app("_fake_routefile_app:bad_factory")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_routefile_app:does_not_exist")

    def test_not_an_app(self) -> None:
        with pytest.raises(TypeError, match="not a RouterApp"):
            resolve_app("_fake_routefile_app:not_an_app")
