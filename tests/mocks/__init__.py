"""
Mock factories for seedgraph tests.

Usage:
    from tests.mocks import FailingUnitOfWork, create_mock_unit_of_work
"""

from .unit_of_work import FailingUnitOfWork, create_mock_unit_of_work

__all__ = ["FailingUnitOfWork", "create_mock_unit_of_work"]
