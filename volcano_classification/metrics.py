"""
Metrics over held-out predictions and the full-data variable importance.
"""
import logging

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from sklearn.inspection import permutation_importance
from sklearn.metrics import accuracy_score, confusion_matrix, precision_score, roc_auc_score

from volcano_classification import config
from volcano_classification.model import make_classifier
from volcano_classification.preprocess import make_preprocessor, make_smote, oversample

logger = logging.getLogger(__name__)


def _roc_auc(truth, proba, classes):
    try:
        return roc_auc_score(truth, proba, multi_class='ovr', average='macro', labels=classes)
    except ValueError as e:
        logger.warning("ROC AUC undefined: %s", e)
        return np.nan


def resample_metrics(predictions, classes=config.CLASSES):
    """
    Accuracy and macro one-vs-rest ROC AUC for each resample.

    predictions: pooled prediction records with a 'resample' column
    """
    proba_cols = [f'pred_{c}' for c in classes]
    rows = []
    for resample_id, preds in predictions.groupby('resample', sort=True):
        truth = preds[config.TARGET]
        rows.append({'resample': resample_id, 'metric': 'accuracy',
                     'estimate': accuracy_score(truth, preds['pred_class'])})
        rows.append({'resample': resample_id, 'metric': 'roc_auc',
                     'estimate': _roc_auc(truth, preds[proba_cols].to_numpy(), classes)})
    return pd.DataFrame(rows, columns=['resample', 'metric', 'estimate'])


def collect_metrics(metrics):
    """Mean and standard error of each metric across resamples."""
    grouped = metrics.groupby('metric')['estimate']
    summary = pd.DataFrame({
        'mean': grouped.mean(),
        'n': grouped.count(),
        'std_err': grouped.std(ddof=1) / np.sqrt(grouped.count()),
    })
    return summary.reset_index()


def pooled_confusion_matrix(predictions, classes=config.CLASSES):
    """Truth x prediction counts over every held-out prediction of every resample."""
    cm = confusion_matrix(predictions[config.TARGET], predictions['pred_class'], labels=classes)
    return pd.DataFrame(cm,
                        index=pd.Index(classes, name='truth'),
                        columns=pd.Index(classes, name='prediction'))


def ppv_by_resample(predictions, classes=config.CLASSES):
    """
    Positive predictive value per class for each resample, not pooled.

    A 'macro' row per resample averages the class-wise values.
    """
    rows = []
    for resample_id, preds in predictions.groupby('resample', sort=True):
        ppv = precision_score(preds[config.TARGET], preds['pred_class'], labels=classes,
                              average=None, zero_division=0)
        rows.extend({'resample': resample_id, 'class': c, 'ppv': v}
                    for c, v in zip(classes, ppv))
        rows.append({'resample': resample_id, 'class': 'macro', 'ppv': float(np.mean(ppv))})
    return pd.DataFrame(rows, columns=['resample', 'class', 'ppv'])


def variable_importance(data, n_trees=config.N_TREES, n_repeats=config.PERMUTATION_REPEATS,
                        random_state=config.RANDOM_STATE, n_jobs=None, preprocessor=None,
                        smote=None, classes=config.CLASSES):
    """
    Rank predictors by permutation importance of one model fit on all rows.

    The forest is fit on the preprocessed, oversampled table and scored on the
    preprocessed real rows only, never on synthetic ones.

    Returns (importance, fitted_preprocessor, classifier) where importance is a
    dataframe with columns feature, importance, std sorted descending.
    """
    X = data.drop(columns=[config.ID_COL, config.TARGET])
    y = data[config.TARGET]
    fitted, X_res, y_res = oversample(
        make_preprocessor() if preprocessor is None else preprocessor, X, y,
        smote=make_smote(random_state=random_state) if smote is None else smote,
        classes=classes)

    classifier = make_classifier(n_trees=n_trees, random_state=random_state, n_jobs=n_jobs)
    classifier.fit(X_res, y_res)
    X_baked = fitted.transform(X)
    logger.info("Scoring permutation importance over %d features", X_baked.shape[1])
    perm = permutation_importance(classifier, X_baked, y, n_repeats=n_repeats,
                                  random_state=random_state, n_jobs=n_jobs)
    importance = pd.DataFrame({
        'feature': X_baked.columns,
        'importance': perm.importances_mean,
        'std': perm.importances_std,
    }).sort_values('importance', ascending=False, ignore_index=True)
    return importance, fitted, classifier


def with_coordinates(predictions, data):
    """
    Join predictions back to volcano coordinates and flag correct rows.

    data: the modeling table the predictions' 'row' positions refer to
    """
    coords = data[[config.ID_COL, 'latitude', 'longitude']].iloc[predictions['row']]
    joined = predictions.reset_index(drop=True).join(coords.reset_index(drop=True))
    joined['correct'] = joined[config.TARGET] == joined['pred_class']
    return joined


def accuracy_hexbins(joined, gridsize=config.HEX_GRIDSIZE, extent=(-180, 180, -90, 90)):
    """
    Mean correctness per hexagonal bin of (longitude, latitude).

    Empty bins are left out.
    """
    fig, ax = plt.subplots()
    try:
        hexes = ax.hexbin(joined['longitude'], joined['latitude'],
                          C=joined['correct'].astype(float), reduce_C_function=np.mean,
                          gridsize=gridsize, extent=extent)
        centers = hexes.get_offsets()
        accuracy = np.asarray(hexes.get_array())
    finally:
        plt.close(fig)
    return pd.DataFrame({'longitude': centers[:, 0], 'latitude': centers[:, 1],
                         'accuracy': accuracy})
