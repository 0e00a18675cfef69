import matplotlib

matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest

from volcano_classification.data import derive_labels

RAW_TYPES = {
    'Stratovolcano': ['Stratovolcano', 'Stratovolcano(es)'],
    'Shield': ['Shield', 'Shield(s)'],
    'Other': ['Caldera', 'Lava dome(s)', 'Submarine'],
}
SETTINGS = {
    'Stratovolcano': 'Subduction zone / Continental crust (>25 km)',
    'Shield': 'Intraplate / Oceanic crust (< 15 km)',
    'Other': 'Rift zone / Oceanic crust (< 15 km)',
}
ROCKS = {
    'Stratovolcano': 'Andesite / Basaltic Andesite',
    'Shield': 'Basalt / Picro-Basalt',
    'Other': 'Dacite',
}


def make_raw_volcanoes(counts, seed=0):
    """
    Synthetic raw volcano table shaped like the public CSV.

    counts: volcano type -> number of rows
    """
    rng = np.random.default_rng(seed)
    rows = []
    for i, (volcano_type, n) in enumerate(counts.items()):
        for j in range(n):
            rows.append({
                'volcano_number': 100000 + len(rows),
                'volcano_name': f'{volcano_type} {j}',
                'primary_volcano_type': RAW_TYPES[volcano_type][j % len(RAW_TYPES[volcano_type])],
                'country': 'Nowhere',
                'latitude': 40.0 * (i - 1) + rng.normal(0, 5),
                'longitude': 60.0 * (i - 1) + rng.normal(0, 10),
                'elevation': np.nan if j == 0 else 1000.0 * (i + 1) + rng.normal(0, 200),
                # mostly the class-typical setting, occasionally a rare one
                'tectonic_settings': 'Unknown' if j == 3 else SETTINGS[volcano_type],
                'major_rock_1': ROCKS[volcano_type],
            })
    return pd.DataFrame(rows)


@pytest.fixture
def raw_volcanoes():
    return make_raw_volcanoes({'Stratovolcano': 10, 'Shield': 10, 'Other': 10})


@pytest.fixture
def volcanoes(raw_volcanoes):
    return derive_labels(raw_volcanoes)


@pytest.fixture
def make_volcanoes():
    """Factory for modeling tables with the given class counts."""
    def _make(counts, seed=0):
        return derive_labels(make_raw_volcanoes(counts, seed=seed))
    return _make
