"""Integration tests for problem tracker sync.

These tests wire the real CLI commands, YAML store, auto-sync hook and
reconciler together, replacing only the Notion HTTP layer with an in-memory
fake. Run them alone with:
    pytest tests/integration -m integration
"""
