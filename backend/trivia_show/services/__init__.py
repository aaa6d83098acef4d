"""Trivia domain services: selection, matching, scoring and timers.

This package contains pure(ish) session logic that is driven by the HTTP
routes and socket handlers, keeping transport concerns separated from the
game mechanics.
"""
