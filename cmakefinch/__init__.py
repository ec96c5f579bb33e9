"""Lexer for CMake scripts, syntax tree nodes, and CPM.cmake package command recognition."""

__version__ = "0.1.0"