"""Aoeline - deadline timelines with constrained milestone editing (AoE)."""

__version__ = "0.1.0"
