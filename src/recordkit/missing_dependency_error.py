"""Exception raised when an optional dependency is not installed."""


class MissingDependencyError(ImportError):
    """
    Raised when a feature needs an optional package that is not installed.

    Attributes:
        package: Name of the missing distribution.
        feature: The recordkit function that needed it.

    """

    def __init__(self, package: str, feature: str) -> None:
        self.package = package
        self.feature = feature
        msg = f"{feature} requires {package}. Install it with: pip install recordkit[{package}]"
        super().__init__(msg)
