"""Overhead of asynchronous sequencing primitives on strictly serial task lists."""

__version__ = "0.1.0"
