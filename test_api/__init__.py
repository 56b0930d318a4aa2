"""
Test Suite for the Auth Contract Harness

This package contains tests for the harness including:
- Unit tests for the action helpers, models and configuration
- Unit tests for the scenario engine
- Contract runs against the seeded reference service
- Tests for the reference service itself
- A live suite for a deployed target
"""
