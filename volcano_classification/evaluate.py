"""
Fit the workflow on every bootstrap resample and collect held-out predictions.
"""
import logging
from dataclasses import dataclass, field

import pandas as pd
from joblib import Parallel, delayed

from volcano_classification import config
from volcano_classification.errors import DegenerateFold
from volcano_classification.metrics import resample_metrics
from volcano_classification.model import fit_workflow, predict_workflow

logger = logging.getLogger(__name__)


@dataclass
class ResampleResults:
    """
    predictions: one row per held-out record per successful resample
    metrics: per-resample metric estimates (resample, metric, estimate)
    failures: resample id -> reason, for resamples left out of both tables
    """
    predictions: pd.DataFrame
    metrics: pd.DataFrame
    failures: dict = field(default_factory=dict)

    @property
    def n_successful(self):
        return self.predictions['resample'].nunique()


def _fit_one(workflow, data, resample, classes):
    analysis, assessment = resample.split(data)
    if assessment.empty:
        raise DegenerateFold("empty assessment set", resample.id)

    X_train = analysis.drop(columns=[config.ID_COL, config.TARGET])
    y_train = analysis[config.TARGET]
    try:
        fitted = fit_workflow(workflow, X_train, y_train, classes)
    except DegenerateFold as e:
        raise DegenerateFold(str(e), resample.id) from e

    preds = predict_workflow(fitted, assessment.drop(columns=[config.ID_COL, config.TARGET]),
                             classes)
    preds.insert(0, config.TARGET, assessment[config.TARGET].values)
    preds.insert(0, 'row', resample.assessment)
    preds.insert(0, 'resample', resample.id)
    return preds.reset_index(drop=True)


def _run_resample(workflow, data, resample, classes):
    try:
        return resample.id, _fit_one(workflow, data, resample, classes), None
    except DegenerateFold as e:
        logger.warning("%s skipped: %s", resample.id, e)
        return resample.id, None, str(e)


def fit_resamples(workflow, data, resamples, classes=config.CLASSES, n_jobs=1):
    """
    Fit an independent clone of `workflow` on each resample's analysis rows
    and predict its assessment rows.

    workflow: unfitted pipeline from make_workflow
    data: modeling table from derive_labels
    resamples: bootstraps of `data`
    n_jobs: joblib workers, resamples share no state
    """
    logger.info("Fitting %d resamples (n_jobs=%s)", len(resamples), n_jobs)
    outcomes = Parallel(n_jobs=n_jobs)(
        delayed(_run_resample)(workflow, data, resample, classes) for resample in resamples)

    pieces = [preds for _, preds, _ in outcomes if preds is not None]
    failures = {resample_id: reason for resample_id, _, reason in outcomes if reason is not None}

    columns = ['resample', 'row', config.TARGET, 'pred_class'] + [f'pred_{c}' for c in classes]
    predictions = (pd.concat(pieces, ignore_index=True) if pieces
                   else pd.DataFrame(columns=columns))
    results = ResampleResults(predictions, resample_metrics(predictions, classes), failures)
    logger.info("%d resamples fit, %d failed", results.n_successful, len(failures))
    return results
