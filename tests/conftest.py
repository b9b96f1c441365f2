"""
Shared fixtures for criteria engine tests.

Provides:
- A framework "F1" with domains D1, D2, D3 in an in-memory store
- A gateway with a fixed clock and a controller on top of it
"""
import pytest

from criteria_engine.criteria import CriteriaController, CriteriaGateway
from criteria_engine.store import MemoryDocumentStore

from .helpers import FIXED_TIMESTAMP, FRAMEWORK_ID, seeded_collections


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore(seeded_collections())


@pytest.fixture
def gateway(store) -> CriteriaGateway:
    return CriteriaGateway(store, timeout=2.0, clock=lambda: FIXED_TIMESTAMP)


@pytest.fixture
def controller(gateway) -> CriteriaController:
    return CriteriaController(FRAMEWORK_ID, gateway)
