class VolcanoAnalysisError(Exception):
    """Base class for errors raised by the analysis."""


class DataUnavailable(VolcanoAnalysisError):
    """The volcano table could not be fetched or parsed."""


class SchemaMismatch(VolcanoAnalysisError):
    """Expected columns are missing or have the wrong type."""


class DegenerateFold(VolcanoAnalysisError):
    """
    A single resample cannot be fit, e.g. a class is too small to oversample.

    resample_id: id of the offending resample, if known
    """

    def __init__(self, message, resample_id=None):
        super().__init__(message)
        self.resample_id = resample_id
