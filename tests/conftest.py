"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A recording console so tests can assert on log output.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'keystone_flow' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from keystone_flow.utils.console import configure_logging, reset_logging  # noqa: E402


@pytest.fixture
def captured_console():
  """
  Routes logging into an in-memory Rich console for the duration of a test.

  Yields:
      Console: The recording console; read it with ``export_text()``.
  """
  recorder = Console(record=True, file=io.StringIO(), width=200)
  configure_logging(recorder)
  yield recorder
  reset_logging()
