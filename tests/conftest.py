import pytest

from crane3d.core.dynamics import ModelType
from crane3d.core.model import CraneModel


@pytest.fixture
def model() -> CraneModel:
    """Crane model with the default rig parameters"""
    return CraneModel()


@pytest.fixture
def make_model():
    """Factory building a model of the given type, optionally with extra params"""
    def _make(model_type=ModelType.LINEAR, params=None) -> CraneModel:
        crane = CraneModel(params)
        crane.type = model_type
        return crane
    return _make
