"""
Volcano type classification: predict Stratovolcano / Shield / Other from
location, elevation, tectonic setting and dominant rock type with a
bootstrapped random forest.
"""
from volcano_classification.errors import (DataUnavailable, DegenerateFold,
                                           SchemaMismatch, VolcanoAnalysisError)

__version__ = '0.1.0'

__all__ = ['DataUnavailable', 'DegenerateFold', 'SchemaMismatch',
           'VolcanoAnalysisError', '__version__']
