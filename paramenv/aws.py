import logging
import threading

import boto3
import botocore.config
import botocore.exceptions

from paramenv import config
from paramenv import exceptions
from paramenv import sinks


logger = logging.getLogger(__name__)


DEFAULT_REGION = "us-east-1"

AWS_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
AWS_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
AWS_SESSION_TOKEN = "AWS_SESSION_TOKEN"

# Errors from the remote store which become failed Results rather than
# exceptions.
remote_errors = (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError)


class ParameterProvider:
    """A paginated source of parameters.

    Listing operations yield one Result per page. A failed Result is always
    the last thing yielded.
    """
    def connect(self):
        pass

    def describe_parameters(self, name_prefixes=()):
        raise NotImplementedError()

    def get_parameter(self, name, decrypt=True):
        raise NotImplementedError()

    def get_parameters_by_path(self, path, recursive=False, decrypt=True):
        raise NotImplementedError()


class AwsParameterStoreProvider(ParameterProvider):
    """Reads parameters from AWS Systems Manager Parameter Store.

    The client is built on first use and reused for the life of the
    provider. Credentials are picked in this order:

        1. credentials_id, treated as the name of an AWS profile
        2. AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (and AWS_SESSION_TOKEN)
           from the ambient environment
        3. boto3's default credential chain

    Timeouts and retries belong to the transport, so they are passed through
    to botocore rather than enforced by the fetch loops.
    """
    def __init__(
            self,
            credentials_id=None,
            region_name=None,
            env=None,
            client=None,
            endpoint_url=None,
            connect_timeout=None,
            read_timeout=None,
            max_attempts=None,
            describe_page_size=None,
    ):
        self._client = client
        self._client_lock = threading.Lock()
        self.credentials_id = credentials_id
        self.region_name = region_name or DEFAULT_REGION
        self.env = env or sinks.AmbientEnvironment()
        self.endpoint_url = endpoint_url
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.max_attempts = max_attempts
        self.describe_page_size = describe_page_size

    def connect(self):
        return self.get_client()

    def get_client(self):
        if self._client is not None:
            return self._client
        with self._client_lock:
            if self._client is None:
                self._client = self.new_client()
        return self._client

    def new_client(self):
        try:
            return self.session().client(
                "ssm",
                region_name=self.region_name,
                endpoint_url=self.endpoint_url,
                config=self.client_config(),
            )
        except (botocore.exceptions.BotoCoreError, ValueError) as e:
            raise exceptions.SetupFailure("cannot create parameter store client: {}".format(e)) from e

    def session(self):
        if self.credentials_id:
            logger.debug("using AWS profile %s", self.credentials_id)
            return boto3.Session(profile_name=self.credentials_id)
        if AWS_ACCESS_KEY_ID in self.env and AWS_SECRET_ACCESS_KEY in self.env:
            logger.debug("using AWS credentials from the build environment")
            return boto3.Session(
                aws_access_key_id=self.env[AWS_ACCESS_KEY_ID],
                aws_secret_access_key=self.env[AWS_SECRET_ACCESS_KEY],
                aws_session_token=self.env.get(AWS_SESSION_TOKEN),
            )
        return boto3.Session()

    def client_config(self):
        kwargs = {}
        if self.connect_timeout is not None:
            kwargs["connect_timeout"] = self.connect_timeout
        if self.read_timeout is not None:
            kwargs["read_timeout"] = self.read_timeout
        if self.max_attempts is not None:
            kwargs["retries"] = {"max_attempts": self.max_attempts}
        return botocore.config.Config(**kwargs)

    def describe_parameters(self, name_prefixes=()):
        kwargs = {}
        if name_prefixes:
            kwargs["ParameterFilters"] = [
                dict(Key="Name", Option="BeginsWith", Values=list(name_prefixes))
            ]
        if self.describe_page_size:
            kwargs["PaginationConfig"] = {"PageSize": self.describe_page_size}
        try:
            pager = self.get_client().get_paginator("describe_parameters").paginate(**kwargs)
            for page in pager:
                yield config.Result.ok([p["Name"] for p in page["Parameters"]])
        except remote_errors as e:
            yield config.Result.failed(exceptions.FetchFailure(",".join(name_prefixes) or "*", e))

    def get_parameter(self, name, decrypt=True):
        try:
            resp = self.get_client().get_parameter(Name=name, WithDecryption=decrypt)
        except remote_errors as e:
            return config.Result.failed(exceptions.FetchFailure(name, e))
        return config.Result.ok(config.Parameter.from_response(resp["Parameter"]))

    def get_parameters_by_path(self, path, recursive=False, decrypt=True):
        try:
            pager = self.get_client().get_paginator("get_parameters_by_path").paginate(
                Path=path,
                Recursive=recursive,
                WithDecryption=decrypt,
            )
            for page in pager:
                yield config.Result.ok([config.Parameter.from_response(p) for p in page["Parameters"]])
        except remote_errors as e:
            yield config.Result.failed(exceptions.FetchFailure(path, e))
