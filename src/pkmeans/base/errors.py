"""
Error and warning types raised by the partition k-means engine.

Both error kinds abort the computation for the whole partition; there is
no partial clustering and no fallback centroid set.
"""


class KMeansError(ValueError):
    """Base class for clustering input errors."""


class InvalidInputError(KMeansError):
    """A row vector has the wrong dimensionality, wrong rank or a missing element."""


class InvalidInitialCentroidsError(KMeansError):
    """Supplied initial centroids have the wrong shape or a missing element."""


class ConvergenceWarning(UserWarning):
    """Emitted when the Lloyd loop stops without meeting its threshold."""
