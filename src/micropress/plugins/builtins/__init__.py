"""Plugins shipped with micropress."""
