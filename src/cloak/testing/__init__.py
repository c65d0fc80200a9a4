"""Test utilities for cloak applications.

    from cloak.testing import TestClient
"""

from cloak.testing.client import TestClient

__all__ = ["TestClient"]
