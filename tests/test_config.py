import pytest

from wobblywindows.config import EffectSettings


def test_defaults():
    settings = EffectSettings()
    assert settings.friction == 3.5
    assert settings.spring_k == 3.8
    assert settings.speedup_factor == 12.0
    assert settings.mass == 70.0
    assert (settings.x_tiles, settings.y_tiles) == (6, 6)
    assert settings.maximize_effect is True
    assert settings.resize_effect is False


def test_derived_values():
    settings = EffectSettings(mass=70.0, spring_k=3.8)
    assert settings.effective_mass == pytest.approx(30.0)
    assert settings.wobbly_stiffness == pytest.approx(1.9)
    assert settings.resize_spring_factor == pytest.approx(0.76)


@pytest.mark.parametrize("field, value", [
    ("friction", 0.0),
    ("friction", -1.0),
    ("spring_k", 0.0),
    ("speedup_factor", 0.0),
    ("mass", 0.0),
    ("mass", 100.0),
    ("mass", 120.0),
    ("x_tiles", 0),
    ("y_tiles", -3),
    ("x_tiles", 2.5),
    ("y_tiles", True),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValueError, match=field):
        EffectSettings(**{field: value})


def test_integral_float_tiles_are_converted():
    settings = EffectSettings(x_tiles=8.0, y_tiles=4.0)
    assert settings.x_tiles == 8 and isinstance(settings.x_tiles, int)
    assert settings.y_tiles == 4 and isinstance(settings.y_tiles, int)


def test_from_dict_accepts_host_keys():
    settings = EffectSettings.from_dict({
        "friction": 2.0,
        "spring-k": 5.0,
        "speedup-factor-divider": 20.0,
        "mass": 40.0,
        "x-tiles": 10.0,
        "y-tiles": 12.0,
        "maximize-effect": False,
        "resize-effect": True,
    })
    assert settings == EffectSettings(
        friction=2.0, spring_k=5.0, speedup_factor=20.0, mass=40.0,
        x_tiles=10, y_tiles=12, maximize_effect=False, resize_effect=True,
    )


def test_from_dict_round_trip():
    settings = EffectSettings(friction=1.5, x_tiles=3)
    assert EffectSettings.from_dict(settings.to_dict()) == settings


def test_from_dict_rejects_unknown_key():
    with pytest.raises(ValueError, match="Unknown setting"):
        EffectSettings.from_dict({"wobbliness": 11})
