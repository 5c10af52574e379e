import json
import logging
import os
from datetime import datetime

import requests

from lambda_cloner import config
from lambda_cloner.errors import SourceFunctionNotFound, UnsupportedPackageType
from lambda_cloner.settings import (
    create_function_kwargs,
    extract_settings,
    update_code_kwargs,
    update_configuration_kwargs,
)

logger = logging.getLogger(__name__)


def make_work_dir(base=None, now=None):
    """Create ./lambda-clone-YYYYmmdd_HHMMSS and return its path"""
    base = base or config.work_dir_base()
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    work_dir = os.path.join(base, f"lambda-clone-{timestamp}")
    os.makedirs(work_dir, exist_ok=True)
    return work_dir


def human_size(num_bytes):
    size = float(num_bytes)
    for unit in ("B", "K", "M", "G"):
        if size < 1024 or unit == "G":
            return f"{int(size)}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024


def describe_summary(settings):
    """Lines for the configuration summary printed before and after a clone"""
    lines = [
        f"  Runtime: {settings['runtime']}",
        f"  Handler: {settings['handler']}",
        f"  Role: {settings['role']}",
        f"  Timeout: {settings['timeout']}s",
        f"  Memory: {settings['memory_size']}MB",
        f"  Ephemeral Storage: {settings['ephemeral_storage']}MB",
        f"  Architecture: {','.join(settings['architectures'])}",
    ]
    if settings["vpc_config"]:
        lines.append("  VPC: Enabled")
    if settings["layers"]:
        lines.append(f"  Layers: {len(settings['layers'])} layer(s)")
    if settings["environment"]:
        lines.append(f"  Environment Variables: {len(settings['environment'])} variable(s)")
    return lines


class LambdaCloner:
    """Copies one Lambda function onto another name in the same region"""

    def __init__(self, lambda_client, work_dir, http=None, waiter_config=None, download_timeout=None):
        self.lambda_client = lambda_client
        self.work_dir = work_dir
        self.http = http or requests.Session()
        self.waiter_config = waiter_config or config.waiter_config()
        self.download_timeout = download_timeout or config.download_timeout()

    @property
    def region(self):
        return self.lambda_client.meta.region_name

    # === FILES ===
    def save_json(self, filename, data):
        path = os.path.join(self.work_dir, filename)
        with open(path, "w") as f:
            json.dump(data, f, indent=2, default=str)  # datetimes from botocore
        logger.debug("Saved %s", path)
        return path

    # === AWS CALLS ===
    def get_function(self, function_name):
        """Return the get_function response, or None if the function does not exist"""
        try:
            return self.lambda_client.get_function(FunctionName=function_name)
        except self.lambda_client.exceptions.ResourceNotFoundException:
            return None

    def fetch_source(self, function_name):
        descriptor = self.get_function(function_name)
        if descriptor is None:
            raise SourceFunctionNotFound(function_name, self.region)
        descriptor.pop("ResponseMetadata", None)
        self.save_json("source-function.json", descriptor)
        return descriptor

    def download_code(self, url, zip_path):
        """Stream the deployment package behind a presigned Code.Location URL to disk"""
        r = self.http.get(url, stream=True, timeout=self.download_timeout)
        r.raise_for_status()
        with open(zip_path, "wb") as f:
            for chunk in r.iter_content(chunk_size=1024 * 64):
                if chunk:
                    f.write(chunk)
        return zip_path

    def wait(self, waiter_name, function_name):
        waiter = self.lambda_client.get_waiter(waiter_name)
        waiter.wait(FunctionName=function_name, WaiterConfig=self.waiter_config)

    def create_function(self, target, settings, zip_bytes):
        kwargs = create_function_kwargs(target, settings, zip_bytes)
        logger.debug("create_function %s", {k: v for k, v in kwargs.items() if k != "Code"})
        resp = self.lambda_client.create_function(**kwargs)
        self.save_json("create-response.json", resp)

        print("  Waiting for function to become active...")
        self.wait("function_active", target)
        print("✅ Function created successfully")

    def update_function(self, target, settings, zip_bytes):
        print("  Updating code...")
        resp = self.lambda_client.update_function_code(**update_code_kwargs(target, settings, zip_bytes))
        self.save_json("update-code-response.json", resp)

        print("  Waiting for code update to complete...")
        self.wait("function_updated", target)

        kwargs = update_configuration_kwargs(target, settings)
        logger.debug("update_function_configuration %s", kwargs)
        print("  Updating configuration...")
        resp = self.lambda_client.update_function_configuration(**kwargs)
        self.save_json("update-config-response.json", resp)

        print("  Waiting for configuration update to complete...")
        self.wait("function_updated", target)
        print("✅ Function updated successfully")

    # === MAIN FLOW ===
    def clone(self, source, target, confirm_update):
        """Clone source onto target.

        confirm_update(target) is called when the target already exists; a
        falsy answer stops the clone before anything is written and None is
        returned. Otherwise the target's get_function response is returned.
        """
        print("⚙️ Step 1: Fetching source Lambda configuration...")
        descriptor = self.fetch_source(source)
        print("✅ Configuration retrieved")

        # image functions carry no Runtime/Handler and no zip to download
        package_type = descriptor["Configuration"].get("PackageType", "Zip")
        if package_type != "Zip":
            raise UnsupportedPackageType(source, package_type)

        settings = extract_settings(descriptor, source)

        print("\nSource Function Details:")
        for line in describe_summary(settings):
            print(line)
        print()

        print("📦 Step 2: Downloading function code...")
        zip_path = self.download_code(settings["code_location"], os.path.join(self.work_dir, f"{source}.zip"))
        print(f"✅ Code downloaded ({human_size(os.path.getsize(zip_path))})")

        print("\n⚙️ Step 3: Checking if target function exists...")
        exists = self.get_function(target) is not None
        if exists:
            print(f"⚠️ Function '{target}' already exists.")
            if not confirm_update(target):
                print("Aborted.")
                return None

        with open(zip_path, "rb") as z:
            zip_bytes = z.read()

        if exists:
            print("\n🔁 Step 4: Updating existing Lambda function...")
            self.update_function(target, settings, zip_bytes)
        else:
            print("\n🚀 Step 4: Creating new Lambda function...")
            self.create_function(target, settings, zip_bytes)

        print("\n⚙️ Step 5: Fetching new function details...")
        new_function = self.lambda_client.get_function(FunctionName=target)
        new_function.pop("ResponseMetadata", None)
        self.save_json("new-function.json", new_function)
        print("✅ Function ready")

        return {
            "source": source,
            "target": target,
            "settings": settings,
            "function_arn": new_function["Configuration"]["FunctionArn"],
            "updated": exists,
            "work_dir": self.work_dir,
        }
