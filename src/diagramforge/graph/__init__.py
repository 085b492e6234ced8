"""Renderer adapters that turn a group tree into a graph description.

``DotRenderer`` targets Graphviz DOT through the ``graphviz`` package.
"""

from .dot import DotRenderer
from .framework import TOP_LEVEL, Declaration, DeclarationKind, GraphRenderer

__all__ = [
    "GraphRenderer",
    "DotRenderer",
    "Declaration",
    "DeclarationKind",
    "TOP_LEVEL",
]
