"""Trips module - persisted itineraries and their regeneration.

This module provides:
- Trip creation in a single transaction
- Trip read/list/delete with ownership checks
- Lock-guarded regeneration that atomically replaces a trip's day plans
"""
