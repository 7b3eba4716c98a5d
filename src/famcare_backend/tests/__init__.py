"""
Test package for famcare_backend.

- test_conditions.py: condition tree evaluation
- test_access_levels.py: access level ordering
- test_engine.py: rule tables and the decision engine
- test_visibility_gate.py: single resource visibility checks
- test_visibility_query.py: list filtering against a seeded SQLite database
- test_store.py: share, assignment and user lookups
- test_guards.py: operation mapping, decorators, HTTP surfacing and context building
- test_cli.py: diagnostics commands
"""
