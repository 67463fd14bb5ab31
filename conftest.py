"""
Root conftest.py for the employee service repository.

Puts each service directory on sys.path so tests can import its ``app``
package without installing it.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """
    Add every service directory under services/ to sys.path.

    Runs before collection, so ``from app...`` imports in test modules
    resolve to the service being tested.
    """
    root_dir = Path(__file__).parent
    services_dir = root_dir / "services"

    for service_path in sorted(services_dir.iterdir()):
        if (service_path / "app").is_dir() and str(service_path) not in sys.path:
            sys.path.insert(0, str(service_path))
