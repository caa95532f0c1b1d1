"""Itinerary module - deterministic allocation of catalog activities to trip days.

This module provides:
- Interest parsing into a normalized category profile
- The allocation engine (pure, no I/O)
"""
