"""
Exception hierarchy for dataset state and remote data sources.
"""


class StabilityError(Exception):
    pass


class DatasetNotLoadedError(StabilityError):
    """Raised when a statistic is requested before any samples were loaded."""


class DataSourceError(StabilityError):
    pass


class DataSourceUnavailable(DataSourceError):
    pass


class FetchTimeout(DataSourceError):
    pass


class InvalidResponse(DataSourceError):
    pass
