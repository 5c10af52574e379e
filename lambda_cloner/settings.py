"""
Field extraction from a GetFunction descriptor and the request parameters
built from it for CreateFunction / UpdateFunctionCode /
UpdateFunctionConfiguration.
"""

DEFAULT_EPHEMERAL_STORAGE = 512
DEFAULT_ARCHITECTURES = ["x86_64"]


def _or_default(value, default):
    # Only a missing or null field falls back; "" and 0 are kept
    return default if value is None else value


def extract_settings(descriptor, source_name):
    """Pull the fields we copy out of a get_function response"""
    config = descriptor["Configuration"]

    vpc = config.get("VpcConfig") or {}
    vpc_config = None
    if vpc.get("SubnetIds"):
        vpc_config = {
            "SubnetIds": list(vpc["SubnetIds"]),
            "SecurityGroupIds": list(vpc.get("SecurityGroupIds") or []),
        }

    ephemeral = config.get("EphemeralStorage") or {}

    return {
        "runtime": config["Runtime"],
        "handler": config["Handler"],
        "role": config["Role"],
        "timeout": config["Timeout"],
        "memory_size": config["MemorySize"],
        "description": _or_default(config.get("Description"), f"Cloned from {source_name}"),
        "ephemeral_storage": _or_default(ephemeral.get("Size"), DEFAULT_EPHEMERAL_STORAGE),
        "architectures": list(_or_default(config.get("Architectures"), DEFAULT_ARCHITECTURES)),
        "layers": [layer["Arn"] for layer in _or_default(config.get("Layers"), [])],
        "environment": dict(_or_default((config.get("Environment") or {}).get("Variables"), {})),
        "vpc_config": vpc_config,
        "package_type": config.get("PackageType", "Zip"),
        "code_location": descriptor.get("Code", {}).get("Location"),
    }


def _common_kwargs(function_name, settings):
    kwargs = {
        "FunctionName": function_name,
        "Runtime": settings["runtime"],
        "Handler": settings["handler"],
        "Role": settings["role"],
        "Timeout": settings["timeout"],
        "MemorySize": settings["memory_size"],
        "EphemeralStorage": {"Size": settings["ephemeral_storage"]},
        "Description": settings["description"],
    }
    if settings["environment"]:
        kwargs["Environment"] = {"Variables": settings["environment"]}
    if settings["layers"]:
        kwargs["Layers"] = settings["layers"]
    if settings["vpc_config"]:
        kwargs["VpcConfig"] = settings["vpc_config"]
    return kwargs


def create_function_kwargs(function_name, settings, zip_bytes):
    kwargs = _common_kwargs(function_name, settings)
    kwargs["Code"] = {"ZipFile": zip_bytes}
    kwargs["Architectures"] = settings["architectures"]
    return kwargs


def update_configuration_kwargs(function_name, settings):
    return _common_kwargs(function_name, settings)


def update_code_kwargs(function_name, settings, zip_bytes):
    return {
        "FunctionName": function_name,
        "ZipFile": zip_bytes,
        "Architectures": settings["architectures"],
    }
