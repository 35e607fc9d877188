"""Core domain logic for personal blood-pressure tracking.

This package contains the pressure rules, the record store contract and the
observable state manager, isolated from any UI toolkit for easy testing.
"""
