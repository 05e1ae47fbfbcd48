"""Exceptions shared by the loader and the table builder."""


class ConfigurationError(Exception):
    """Raised when the dataset or the table configuration cannot be used.

    Covers a required column absent from the data, a value that does not
    match its declared schema type, an unknown variable kind, and a
    stratification column with no levels.  Missing values are never a
    configuration error.
    """
