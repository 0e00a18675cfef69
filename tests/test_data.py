import numpy as np
import pandas as pd
import pytest

from volcano_classification import config
from volcano_classification.data import classify_volcano_type, derive_labels, load_volcanoes
from volcano_classification.errors import DataUnavailable, SchemaMismatch


@pytest.mark.parametrize('primary_type, expected', [
    ('Stratovolcano', 'Stratovolcano'),
    ('Stratovolcano(es)', 'Stratovolcano'),
    ('Shield(s)', 'Shield'),
    ('Shield / Stratovolcano', 'Stratovolcano'),
    ('Caldera', 'Other'),
    ('shield', 'Other'),
    (np.nan, 'Other'),
])
def test_classify_volcano_type(primary_type, expected):
    assert classify_volcano_type(pd.Series([primary_type])).iloc[0] == expected


def test_classify_volcano_type_is_deterministic():
    types = pd.Series(['Shield', 'Caldera', 'Stratovolcano(es)', 'Pyroclastic shield'] * 5)
    first = classify_volcano_type(types)
    second = classify_volcano_type(types)
    pd.testing.assert_series_equal(first, second)
    assert set(first) <= set(config.VOLCANO_TYPES)


def test_derive_labels_keeps_modeling_columns(raw_volcanoes):
    df = derive_labels(raw_volcanoes)
    assert df.columns.tolist() == config.MODEL_COLS
    assert len(df) == len(raw_volcanoes)
    assert df[config.TARGET].value_counts().to_dict() == {
        'Stratovolcano': 10, 'Shield': 10, 'Other': 10}
    assert df['elevation'].isna().sum() == 3


def test_derive_labels_missing_column(raw_volcanoes):
    with pytest.raises(SchemaMismatch, match='major_rock_1'):
        derive_labels(raw_volcanoes.drop(columns=['major_rock_1']))


def test_derive_labels_non_numeric_coordinates(raw_volcanoes):
    raw_volcanoes['latitude'] = 'north'
    with pytest.raises(SchemaMismatch, match='latitude'):
        derive_labels(raw_volcanoes)


def test_load_volcanoes_from_file(tmp_path, raw_volcanoes):
    path = tmp_path / 'volcano.csv'
    raw_volcanoes.to_csv(path, index=False)
    loaded = load_volcanoes(path)
    assert loaded.shape == raw_volcanoes.shape
    assert derive_labels(loaded)[config.TARGET].tolist() == \
        derive_labels(raw_volcanoes)[config.TARGET].tolist()


def test_load_volcanoes_missing_file(tmp_path):
    with pytest.raises(DataUnavailable):
        load_volcanoes(tmp_path / 'does_not_exist.csv')


def test_load_volcanoes_empty_file(tmp_path):
    path = tmp_path / 'empty.csv'
    path.write_text('')
    with pytest.raises(DataUnavailable):
        load_volcanoes(path)


def test_derive_labels_all_missing_types(raw_volcanoes):
    raw_volcanoes['primary_volcano_type'] = np.nan
    df = derive_labels(raw_volcanoes)
    assert (df[config.TARGET] == 'Other').all()


def test_load_volcanoes_empty_type_column(tmp_path, raw_volcanoes):
    raw_volcanoes['primary_volcano_type'] = np.nan
    path = tmp_path / 'volcano.csv'
    raw_volcanoes.to_csv(path, index=False)
    loaded = load_volcanoes(path)
    assert pd.api.types.is_float_dtype(loaded['primary_volcano_type'])
    assert derive_labels(loaded)[config.TARGET].unique().tolist() == ['Other']
