import sys
from pathlib import Path

import pytest

# Ensure the project root is importable when pytest starts from any directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from parsing import parse, to_postfix  # noqa: E402


@pytest.fixture
def postfix():
    """Factory turning infix text into a postfix Expression."""
    def _postfix(text):
        return to_postfix(parse(text))
    return _postfix


@pytest.fixture
def sample_points():
    # off every real-axis branch cut used by the inverse functions
    return [0.3 + 0.2j, -0.4 + 0.1j, 0.2 - 0.3j]
