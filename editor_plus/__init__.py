"""
Block Editor+ — patterns, per-block CSS/JS, snippets, block variations and
frontend cleanup for a block editor, served through a FastAPI admin API.
"""
__version__ = "1.0.0"
