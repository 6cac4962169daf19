"""Pytest configuration and fixtures for config package tests."""

import sys
import types

import pytest


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary."""
    return {
        "provider": [
            {"name": "default", "cached": True},
            {"name": "fresh", "cached": False},
        ],
        "controller": [
            {"name": "strict", "continue_validation": False},
        ],
        "settings": {
            "ignore_empty_results": True,
            "controller.provider": "myapp.validators.build_provider",
        },
    }


@pytest.fixture
def env_vars(monkeypatch):
    """Helper to set environment variables."""

    def _set_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, value)

    return _set_env


class Widget:
    """Plain class built from configuration in tests."""

    def __init__(self, size=1, color="red"):
        self.size = size
        self.color = color


class WidgetFactory:
    """Factory with a create method built from configuration in tests."""

    def create(self, **config):
        return Widget(size=config.get("size", 0) * 2, color=config.get("color", "blue"))


def make_widget(**config):
    return Widget(**config)


@pytest.fixture
def widgets(monkeypatch):
    """Expose the widget helpers under an importable module name."""
    module = types.ModuleType("widgets")
    module.Widget = Widget
    module.WidgetFactory = WidgetFactory
    module.make_widget = make_widget
    monkeypatch.setitem(sys.modules, "widgets", module)
    return module
