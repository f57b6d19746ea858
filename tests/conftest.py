import matplotlib

matplotlib.use("Agg")

import pytest

from wobblywindows.config import EffectSettings
from wobblywindows.model.geometry import Rect


@pytest.fixture
def settings() -> EffectSettings:
    return EffectSettings()


@pytest.fixture
def frame() -> Rect:
    return Rect(x=100.0, y=50.0, width=200.0, height=100.0)
