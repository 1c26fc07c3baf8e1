"""Exposes AWS Parameter Store parameters as build environment variables."""

from paramenv.builders import ParameterStoreBuildWrapper
from paramenv.builders import build_env_vars
from paramenv.config import FetchRequest
from paramenv.exceptions import LoadFailure
from paramenv.exceptions import SetupFailure
from paramenv.fetchers import ParameterFetcher
from paramenv.naming import NamingMode
from paramenv.naming import translate
from paramenv.sinks import AmbientEnvironment
from paramenv.sinks import DictSink

# TODO(paramenv): Accept an explicit ParameterFilters list alongside name prefixes (Type, KeyId, Tier filters).
