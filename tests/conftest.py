"""
Shared test configuration and fixtures.

Test-type-specific fixtures are defined in:
- tests/unit/conftest.py for unit tests (store on tmp_path, test config)
- tests/unit/routers/conftest.py for router tests (mocked app state)
- tests/integration/conftest.py for integration tests (real app)
"""

from __future__ import annotations
