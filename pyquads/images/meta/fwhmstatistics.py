class FWHMStatistics:
    """Median and sigma-clipped mean of the FWHM of all unsaturated stars in an image, in pixels."""

    __module__ = "pyquads.images.meta"

    def __init__(
        self,
        median_major: float,
        median_minor: float,
        clipped_mean_major: float,
        clipped_mean_minor: float,
        count: int = 0,
    ):
        self.median_major = median_major
        self.median_minor = median_minor
        self.clipped_mean_major = clipped_mean_major
        self.clipped_mean_minor = clipped_mean_minor
        self.count = count


__all__ = ["FWHMStatistics"]
