"""Keyboard-driven terminal client for OData-style record collections."""
