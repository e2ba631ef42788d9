"""Evaluable models and domains."""

from .domains import Interval, always, split_points
from .piecewise import Model, PiecewiseModel, no_value
from .shapes import FitLineBetween, Hyperbola, Line, Parabola

__all__ = [
    "Interval",
    "always",
    "split_points",
    "Model",
    "PiecewiseModel",
    "no_value",
    "FitLineBetween",
    "Hyperbola",
    "Line",
    "Parabola",
]
