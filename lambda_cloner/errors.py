class CloneError(Exception):
    """Base error for a clone that cannot proceed."""


class SourceFunctionNotFound(CloneError):
    def __init__(self, function_name, region):
        self.function_name = function_name
        self.region = region
        super().__init__(f"Source function '{function_name}' not found in region {region}")


class UnsupportedPackageType(CloneError):
    def __init__(self, function_name, package_type):
        self.function_name = function_name
        self.package_type = package_type
        super().__init__(
            f"Function '{function_name}' uses package type {package_type}; only Zip packages can be cloned"
        )
