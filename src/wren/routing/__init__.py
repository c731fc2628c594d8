"""Routing — resource definitions compiled into an ordered rule tree.

Rules and resources are declared during setup and compiled into an
immutable tree when the router freezes.
"""
