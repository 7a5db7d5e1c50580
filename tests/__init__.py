"""
download-artifact Test Suite
============================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/          → Tests for download_artifact.core (config, models, enums)
    ├── test_selection/     → Tests for download_artifact.selection (filter, selector)
    ├── test_infrastructure/→ Tests for download_artifact.infrastructure (extractor)
    ├── test_integrations/  → Tests for download_artifact.integrations (GitHub, runner)
    ├── test_integration/   → End-to-end runs through the entry point
    └── conftest.py         → Shared pytest fixtures and builders

Running Tests:
    pytest                          # Run all tests
    pytest tests/test_core/         # Run only core tests
    pytest -m unit                  # Run only unit tests
    pytest -m integration           # Run only integration tests
"""
