import os
import sys
import warnings

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from equation_engine import EquationGrammar


def pytest_configure(config):
    # Float edge cases (1/0, 0/0, overflow) must not emit RuntimeWarning
    warnings.filterwarnings("error", category=RuntimeWarning, module="expression")


@pytest.fixture(scope="session")
def grammar():
    """Provides a non-strict EquationGrammar shared across tests."""
    return EquationGrammar()


@pytest.fixture(scope="session")
def strict_grammar():
    return EquationGrammar(strict=True)
