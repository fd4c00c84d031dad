"""Quadruped robot building blocks: matrices, components, URDF geometry and a message relay."""

__version__ = "0.1.0"

__all__ = ["components", "matrix", "params", "relay", "timing", "urdf"]