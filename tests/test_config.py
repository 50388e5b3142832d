"""Tests for the rendering configuration."""

from symbolicmath.config import RenderConfig, render_config
from symbolicmath.symbolic.expr import Constant, Monomial, new_variable


def test_default_config():
    config = RenderConfig()
    assert config.float_format == "{:g}"
    assert config.variable_prefix == "x_"
    assert config.format_float(2.0) == "2"


def test_float_format_applies_to_rendering(monkeypatch):
    monkeypatch.setattr(render_config, "float_format", "{:.2f}")
    x = new_variable(name="x")
    assert str(Constant(1.5)) == "1.50"
    assert str(Monomial(3.0, (x,), (2,))) == "3.00 x^2"


def test_variable_prefix_applies_to_new_variables(monkeypatch):
    monkeypatch.setattr(render_config, "variable_prefix", "v")
    x = new_variable()
    assert str(x) == f"v{x.id}"
