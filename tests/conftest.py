import io
import zipfile

import boto3
import pytest
import requests
from moto import mock_aws

REGION = "us-east-1"
SOURCE = "orders-api"
TARGET = "orders-api-manual"

TRUST_POLICY = """{
  "Version": "2012-10-17",
  "Statement": [{"Effect": "Allow", "Principal": {"Service": "lambda.amazonaws.com"}, "Action": "sts:AssumeRole"}]
}"""


def make_zip(body="def handler(event, context):\n    return {'ok': True}\n"):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("app.py", body)
    return buf.getvalue()


class FakeResponse:
    def __init__(self, content, status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]


class FakeHttp:
    """Serves the same bytes for every code location URL"""

    def __init__(self, content, status_code=200):
        self.content = content
        self.status_code = status_code
        self.calls = []

    def get(self, url, stream=False, timeout=None):
        self.calls.append({"url": url, "stream": stream, "timeout": timeout})
        return FakeResponse(self.content, self.status_code)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.setenv("AWS_REGION", REGION)
    monkeypatch.setenv("CLONE_WAIT_DELAY", "1")
    monkeypatch.setenv("CLONE_WAIT_MAX_ATTEMPTS", "3")


@pytest.fixture
def aws():
    with mock_aws():
        yield


@pytest.fixture
def lambda_client(aws):
    return boto3.client("lambda", region_name=REGION)


@pytest.fixture
def role_arn(aws):
    iam = boto3.client("iam", region_name=REGION)
    return iam.create_role(RoleName="orders-api-role", AssumeRolePolicyDocument=TRUST_POLICY)["Role"]["Arn"]


@pytest.fixture
def code_zip():
    return make_zip()


@pytest.fixture
def http(code_zip):
    return FakeHttp(code_zip)


@pytest.fixture
def layer_arn(lambda_client):
    resp = lambda_client.publish_layer_version(
        LayerName="shared-utils",
        Content={"ZipFile": make_zip("VALUE = 1\n")},
        CompatibleRuntimes=["python3.11"],
    )
    return resp["LayerVersionArn"]


@pytest.fixture
def source_function(lambda_client, role_arn, code_zip, layer_arn):
    return lambda_client.create_function(
        FunctionName=SOURCE,
        Runtime="python3.11",
        Role=role_arn,
        Handler="app.handler",
        Code={"ZipFile": code_zip},
        Description="Orders API",
        Timeout=45,
        MemorySize=512,
        Environment={"Variables": {"TABLE_NAME": "orders", "STAGE": "prod"}},
        Layers=[layer_arn],
    )
