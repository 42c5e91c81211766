"""Solvers and katas for the hackattic puzzle platform."""

__version__ = "0.1.0"
