"""
Random forest classifier composed with the preprocessing steps and SMOTE.
"""
import pandas as pd
from imblearn.pipeline import Pipeline as ImbPipeline
from sklearn.base import clone
from sklearn.ensemble import RandomForestClassifier

from volcano_classification import config
from volcano_classification.errors import DegenerateFold
from volcano_classification.preprocess import check_oversampling, make_preprocessor, make_smote


def make_classifier(n_trees=config.N_TREES, random_state=config.RANDOM_STATE, n_jobs=None):
    return RandomForestClassifier(n_estimators=n_trees, random_state=random_state,
                                  n_jobs=n_jobs)


def make_workflow(preprocessor=None, smote=None, classifier=None):
    """
    preprocessing steps -> smote -> classifier. The SMOTE step only runs
    during fit, so predictions never see synthetic rows.

    imblearn does not accept a nested Pipeline as an intermediate step, so the
    preprocessor's steps are spliced in under their own names.
    """
    preprocessor = make_preprocessor() if preprocessor is None else preprocessor
    return ImbPipeline(list(preprocessor.steps) + [
        ('smote', make_smote() if smote is None else smote),
        ('classifier', make_classifier() if classifier is None else classifier),
    ])


def fit_workflow(workflow, X, y, classes=config.CLASSES):
    """
    Fit a fresh clone of `workflow` on training rows.

    Raises DegenerateFold when a class is too small to oversample or any
    library step rejects the data.
    """
    fitted = clone(workflow)
    check_oversampling(y, classes, fitted.named_steps['smote'].k_neighbors)
    try:
        fitted.fit(X, y)
    except ValueError as e:
        raise DegenerateFold(f"workflow fit failed: {e}") from e
    return fitted


def predict_workflow(fitted, X, classes=config.CLASSES):
    """
    Predicted class and one probability column per class, in `classes` order.

    fitted: workflow returned by fit_workflow
    X: rows to predict
    """
    proba = pd.DataFrame(fitted.predict_proba(X), index=X.index,
                         columns=[f'pred_{c}' for c in fitted.classes_])
    proba = proba.reindex(columns=[f'pred_{c}' for c in classes], fill_value=0.0)
    proba.insert(0, 'pred_class', fitted.predict(X))
    return proba
