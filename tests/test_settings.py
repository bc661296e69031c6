"""
Unit tests for export settings
"""

import pytest
import yaml

from pixel_prefab.core import (
    ExportSettings, HorizontalAlignment, SlotPolicy, VerticalAlignment,
    load_settings, save_settings,
)


def test_defaults():
    settings = ExportSettings()

    assert settings.pixels_per_unit == 1.0
    assert settings.horizontal_alignment == HorizontalAlignment.LEFT
    assert settings.vertical_alignment == VerticalAlignment.TOP
    assert settings.slot_policy == SlotPolicy.PAD
    assert settings.seed == 0


def test_from_dict_converts_enums_and_ignores_unknown_keys():
    settings = ExportSettings.from_dict({
        'name': 'gem',
        'horizontal_alignment': 'center',
        'vertical_alignment': 'bottom',
        'slot_policy': 'strict',
        'colour_depth': 8,
    })

    assert settings.name == 'gem'
    assert settings.horizontal_alignment == HorizontalAlignment.CENTER
    assert settings.vertical_alignment == VerticalAlignment.BOTTOM
    assert settings.slot_policy == SlotPolicy.STRICT


@pytest.mark.parametrize('field, value', [
    ('pixels_per_unit', 0),
    ('speed', -1.0),
    ('horizontal_alignment', 'middle'),
    ('slot_policy', 'truncate'),
])
def test_invalid_values_raise(field, value):
    with pytest.raises(ValueError):
        ExportSettings(**{field: value})


def test_replace_skips_none():
    settings = ExportSettings(name='a', depth=3).replace(name='b', depth=None, looped=True)

    assert settings.name == 'b'
    assert settings.depth == 3
    assert settings.looped is True


def test_save_and_load(tmp_path):
    settings = ExportSettings(name='torch', pixels_per_unit=16, looped=True,
                              vertical_alignment='bottom', seed=42)
    path = save_settings(settings, tmp_path / 'torch.yaml')

    data = yaml.safe_load(path.read_text())
    assert data['vertical_alignment'] == 'bottom'

    assert load_settings(path) == settings


def test_load_partial_file(tmp_path):
    path = tmp_path / 'partial.yaml'
    path.write_text("name: partial\nlifetime: 2.5\n")

    settings = load_settings(path)
    assert settings.name == 'partial'
    assert settings.lifetime == 2.5
    assert settings.depth == ExportSettings().depth


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / 'nope.yaml')


def test_load_non_mapping(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text("- 1\n- 2\n")

    with pytest.raises(ValueError):
        load_settings(path)
