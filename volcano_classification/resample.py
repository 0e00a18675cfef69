"""
Bootstrap resampling of the modeling table.
"""
from dataclasses import dataclass

import numpy as np

from volcano_classification import config


@dataclass(frozen=True)
class Bootstrap:
    """
    One bootstrap resample.

    id: unique name among the generated resamples, e.g. 'Bootstrap07'
    analysis: row positions drawn with replacement, same size as the data
    assessment: sorted row positions that were never drawn
    """
    id: str
    analysis: np.ndarray
    assessment: np.ndarray

    def split(self, data):
        """Return the (analysis, assessment) frames for this resample."""
        return data.iloc[self.analysis], data.iloc[self.assessment]


def bootstraps(data, times=config.N_RESAMPLES, random_state=config.RANDOM_STATE):
    """
    Draw `times` independent bootstrap resamples of `data`.

    random_state: seed for the generator, None for an unseeded run
    """
    if times < 1:
        raise ValueError(f"times must be at least 1, got {times}")
    n_rows = len(data)
    rng = np.random.default_rng(random_state)
    width = len(str(times))

    resamples = []
    for i in range(times):
        analysis = rng.choice(n_rows, size=n_rows, replace=True)
        assessment = np.setdiff1d(np.arange(n_rows), analysis)
        resamples.append(Bootstrap(f"Bootstrap{i + 1:0{width}d}", analysis, assessment))
    return resamples
