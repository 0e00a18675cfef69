"""
Preprocessing steps fit on a resample's training rows and reused on its
held-out rows.

Steps, in order:
    1. impute, then pool rare categories into 'other'
    2. one-hot encode tectonic setting and major rock
    3. drop zero-variance columns
    4. standardize every predictor
    5. SMOTE, training data only (see `oversample`)
"""
import logging

import numpy as np
import pandas as pd
from imblearn.over_sampling import SMOTE
from sklearn.base import BaseEstimator, OneToOneFeatureMixin, TransformerMixin, clone
from sklearn.compose import ColumnTransformer
from sklearn.feature_selection import VarianceThreshold
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler
from sklearn.utils.validation import check_is_fitted

from volcano_classification import config
from volcano_classification.errors import DegenerateFold

logger = logging.getLogger(__name__)


class RareCategoryCollapser(OneToOneFeatureMixin, TransformerMixin, BaseEstimator):
    """
    Pool categories seen in less than `threshold` of the training rows.

    Levels never seen during fit are pooled as well.
    """

    def __init__(self, threshold=config.OTHER_THRESHOLD, other_label=config.OTHER_LABEL):
        self.threshold = threshold
        self.other_label = other_label

    def fit(self, X, y=None):
        X = pd.DataFrame(X)
        self.feature_names_in_ = np.asarray(X.columns, dtype=object)
        self.n_features_in_ = X.shape[1]
        self.levels_ = {}
        for col in X.columns:
            freq = X[col].value_counts(normalize=True)
            self.levels_[col] = sorted(freq[freq >= self.threshold].index)
        return self

    def transform(self, X):
        check_is_fitted(self, 'levels_')
        X = pd.DataFrame(X, columns=self.feature_names_in_).copy()
        for col, keep in self.levels_.items():
            X[col] = X[col].where(X[col].isin(keep), self.other_label)
        return X


def make_preprocessor(categorical_cols=config.CATEGORICAL_COLS,
                      numeric_cols=config.NUMERIC_COLS,
                      other_threshold=config.OTHER_THRESHOLD):
    """
    Unfitted preprocessing steps 1-4 with pandas output.

    categorical_cols: columns to pool and one-hot encode
    numeric_cols: columns passed through to scaling
    other_threshold: minimum training frequency for a category to keep its own level
    """
    numeric_transformer = Pipeline([
        ('imputer', SimpleImputer(strategy='median')),
    ])

    categorical_transformer = Pipeline([
        ('imputer', SimpleImputer(strategy='most_frequent')),
        ('other', RareCategoryCollapser(threshold=other_threshold)),
        ('onehot', OneHotEncoder(handle_unknown='ignore', sparse_output=False)),
    ])

    columns = ColumnTransformer([
        ('num', numeric_transformer, list(numeric_cols)),
        ('cat', categorical_transformer, list(categorical_cols)),
    ], verbose_feature_names_out=False)

    preprocessor = Pipeline([
        ('columns', columns),
        ('zero_variance', VarianceThreshold(threshold=0.0)),
        ('scaler', StandardScaler()),
    ])
    return preprocessor.set_output(transform='pandas')


def make_smote(k_neighbors=config.SMOTE_NEIGHBORS, random_state=config.RANDOM_STATE):
    return SMOTE(k_neighbors=k_neighbors, random_state=random_state)


def check_oversampling(y, classes=config.CLASSES, k_neighbors=config.SMOTE_NEIGHBORS):
    """
    Raise DegenerateFold if SMOTE cannot run on these training labels.

    Each class needs itself plus `k_neighbors` same-class rows.
    """
    counts = pd.Series(y).value_counts().reindex(classes, fill_value=0)
    too_small = counts[counts < k_neighbors + 1]
    if not too_small.empty:
        raise DegenerateFold(
            f"classes {too_small.to_dict()} have fewer than {k_neighbors + 1} "
            f"training rows needed for SMOTE with k_neighbors={k_neighbors}")


def oversample(preprocessor, X, y, smote=None, classes=config.CLASSES):
    """
    Fit `preprocessor` on training rows and balance the classes with SMOTE.

    Returns (fitted_preprocessor, X_resampled, y_resampled). The input
    preprocessor is cloned, never fitted in place.
    """
    smote = make_smote() if smote is None else clone(smote)
    check_oversampling(y, classes, smote.k_neighbors)
    fitted = clone(preprocessor)
    try:
        X_baked = fitted.fit_transform(X, y)
        X_res, y_res = smote.fit_resample(X_baked, y)
    except ValueError as e:
        raise DegenerateFold(f"preprocessing failed: {e}") from e
    logger.debug("SMOTE class counts: %s -> %s",
                 pd.Series(y).value_counts().to_dict(),
                 pd.Series(y_res).value_counts().to_dict())
    return fitted, X_res, y_res
