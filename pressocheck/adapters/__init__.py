"""Concrete record store backends."""
