"""Stochastic binary branching process: generation, measurement and sampling."""

__version__ = "0.3.0"
