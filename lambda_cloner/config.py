import os

# === DEFAULTS (overridable through the environment) ===
DEFAULT_REGION = "us-east-1"
DEFAULT_WORK_DIR = "."
DEFAULT_WAIT_DELAY = 5
DEFAULT_WAIT_MAX_ATTEMPTS = 60
DEFAULT_DOWNLOAD_TIMEOUT = 60


def _int_env(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def region():
    return os.getenv("AWS_REGION") or DEFAULT_REGION


def work_dir_base():
    return os.getenv("CLONE_WORK_DIR") or DEFAULT_WORK_DIR


def waiter_config():
    """WaiterConfig passed to the boto3 lambda waiters"""
    return {
        "Delay": _int_env("CLONE_WAIT_DELAY", DEFAULT_WAIT_DELAY),
        "MaxAttempts": _int_env("CLONE_WAIT_MAX_ATTEMPTS", DEFAULT_WAIT_MAX_ATTEMPTS),
    }


def download_timeout():
    return _int_env("CLONE_DOWNLOAD_TIMEOUT", DEFAULT_DOWNLOAD_TIMEOUT)
