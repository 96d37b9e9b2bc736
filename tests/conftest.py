import sys
from pathlib import Path

import pytest

# Add project root to sys.path for local package imports
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def write_log(tmp_path):
    """Write access-log lines to a file under tmp_path and return its path."""
    def _write(lines, name='access.log'):
        path = tmp_path / name
        text = ''.join(line + '\n' for line in lines)
        path.write_text(text, encoding='utf-8')
        return path
    return _write
