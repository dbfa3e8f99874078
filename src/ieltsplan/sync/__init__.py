"""Sync layer.

This package is the single source of truth for how partial updates from
the Planner, Resource Hub and Chill Zone modules are recognised and merged
into the one shared StoredState object.
"""
