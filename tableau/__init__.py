"""
Tableau - Card Game Rule Engine

A deterministic, rendering-free engine for turn-based patience and
card games. The engine provides:
- Card, pile and deck primitives with injectable RNG
- Generic game state, turn sequencing and undo/redo
- Rule engines for Beleaguered Castle and 9-Card Golf
- AI strategies for Golf
- Session drivers and an HTTP API for external front-ends
"""

__version__ = "0.1.0"
