"""Reusable patterns shared by the service's verticals.

Each module is a self-contained building block that entity-specific code
subclasses or wires up, starting with the async repository layer.
"""
