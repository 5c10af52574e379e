"""Copy an AWS Lambda function's code and configuration to another function."""

from lambda_cloner.cloner import LambdaCloner
from lambda_cloner.errors import CloneError, SourceFunctionNotFound, UnsupportedPackageType

__version__ = "0.1.0"

__all__ = [
    "LambdaCloner",
    "CloneError",
    "SourceFunctionNotFound",
    "UnsupportedPackageType",
]
