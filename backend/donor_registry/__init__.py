"""Donor Registry Package — blood-donor registry backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
