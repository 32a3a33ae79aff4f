"""Test suite for the jobform form control core.

This package contains tests for:
- Field path resolution (reads, copy-on-write, unknown paths)
- Validation rules (every rule and message, position-dependent rules, order independence)
- Form state updates (input coercion, snapshot shape checks)
- Submission state machine (transitions, exactly-once success callback)
- Event system (emission, serialization, listener isolation)
- Integration scenarios (complete form sessions)
"""
