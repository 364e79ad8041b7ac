"""
Games - Rule engines built on engine_core.

Each game provides:
- state: board/player data structures
- rules: legality, apply/undo, termination
- transcript: replay-ready records
"""
