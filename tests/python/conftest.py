"""
Pytest configuration and shared fixtures for vecmat tests.
"""

import pytest
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import vecmat
from vecmat import Matrix, Vector


# Try to import scipy (independent reference for factorizations)
try:
    import scipy.linalg
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts and ends with default configuration."""
    vecmat.config.reset()
    yield
    vecmat.config.reset()


@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture
def v123():
    """Vector [1, 2, 3]."""
    return Vector.from_values([1, 2, 3])


@pytest.fixture
def v321():
    """Vector [3, 2, 1]."""
    return Vector.from_values([3, 2, 1])


@pytest.fixture
def m23():
    """2x3 matrix.

    [[1, 2, 3],
     [4, 5, 6]]
    """
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def m32():
    """3x2 matrix.

    [[1, 2],
     [3, 4],
     [5, 6]]
    """
    return Matrix.from_rows([[1, 2], [3, 4], [5, 6]])


@pytest.fixture
def m22():
    """Invertible 2x2 matrix [[1, 2], [4, 5]] (det = -3)."""
    return Matrix.from_rows([[1, 2], [4, 5]])


@pytest.fixture
def m33():
    """Invertible 3x3 matrix that needs row pivoting."""
    return Matrix.from_rows([
        [0.0, 2.0, 1.0],
        [1.0, -1.0, 3.0],
        [4.0, 1.0, -2.0],
    ])


@pytest.fixture
def singular33():
    """Rank-2 3x3 matrix (row 2 = row 0 + row 1)."""
    return Matrix.from_rows([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [5.0, 7.0, 9.0],
    ])
