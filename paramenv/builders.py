"""The high level interface for populating a build environment.

    wrapper = ParameterStoreBuildWrapper(path="/{STAGE}/app/", naming="relative")
    wrapper.set_up(AmbientEnvironment.from_os(), DictSink(build_env))

or in one call:

    build_env_vars(env, sink, path="/prod/app/", recursive=True)

"""

from paramenv import aws
from paramenv import config
from paramenv import exceptions
from paramenv import fetchers
from paramenv import formats
from paramenv import helpers
from paramenv import sinks


def strip_to_none(x):
    if x is None:
        return None
    x = x.strip()
    return x or None


class ParameterStoreBuildWrapper:
    """Settings for fetching parameters into one build's environment.

    A fresh provider is built by every set_up(), so nothing is shared
    between builds.
    """
    settings_keys = ("credentials_id", "region_name", "path", "recursive", "naming", "name_prefixes")

    def __init__(
            self,
            credentials_id=None,
            region_name=None,
            path=None,
            recursive=False,
            naming=None,
            name_prefixes=None,
            provider_factory=None,
    ):
        self.credentials_id = credentials_id
        self.region_name = region_name
        self.path = path
        self.recursive = recursive
        self.naming = naming
        self.name_prefixes = name_prefixes
        self.provider_factory = provider_factory or aws.AwsParameterStoreProvider

    @property
    def credentials_id(self):
        return self._credentials_id

    @credentials_id.setter
    def credentials_id(self, x):
        self._credentials_id = strip_to_none(x)

    @property
    def path(self):
        return self._path

    @path.setter
    def path(self, x):
        self._path = strip_to_none(x)

    @property
    def name_prefixes(self):
        return self._name_prefixes

    @name_prefixes.setter
    def name_prefixes(self, x):
        if isinstance(x, (list, tuple)):
            x = ",".join(x)
        self._name_prefixes = strip_to_none(x)

    @classmethod
    def from_file(cls, filename, reader=None, **kwargs):
        """Loads wrapper settings from a JSON, TOML or YAML file."""
        loader = formats.settings_loader_for_filename(filename)
        if reader is None:
            try:
                with open(filename, 'rb') as f:
                    data = f.read()
            except IOError as e:
                raise exceptions.LoadFailure(e)
        else:
            data = reader(filename)
        settings = loader(data)
        if settings is None:
            settings = {}
        if not isinstance(settings, dict):
            raise exceptions.LoadFailure("settings in {} are not a mapping".format(filename))
        unknown = set(settings) - set(cls.settings_keys)
        if unknown:
            raise exceptions.LoadFailure("unknown settings in {}: {}".format(filename, ", ".join(sorted(unknown))))
        return cls(**settings, **kwargs)

    def fetch_request(self, env: sinks.AmbientEnvironment) -> config.FetchRequest:
        return config.FetchRequest.from_settings(
            path=self.expanded("path", self.path, env),
            recursive=self.recursive,
            naming_mode=self.naming,
            name_prefixes=self.expanded("name_prefixes", self.name_prefixes, env),
        )

    @staticmethod
    def expanded(field, x, env):
        if x is None:
            return None
        e = helpers.ExpandableString(x).expand(env)
        if e is None:
            raise exceptions.SetupFailure("cannot expand {} {!r}: variable missing from environment".format(field, x))
        return e

    def new_provider(self, env):
        return self.provider_factory(
            credentials_id=self.credentials_id,
            region_name=self.region_name,
            env=env,
        )

    def set_up(self, env: sinks.AmbientEnvironment, sink: sinks.EnvironmentSink) -> fetchers.FetchReport:
        request = self.fetch_request(env)
        provider = self.new_provider(env)
        provider.connect()
        return fetchers.ParameterFetcher(provider).fetch(request, sink)


def build_env_vars(
        env,
        sink,
        credentials_id=None,
        region_name=None,
        path=None,
        recursive=False,
        naming=None,
        name_prefixes=None,
):
    if not isinstance(env, sinks.AmbientEnvironment):
        env = sinks.AmbientEnvironment(env)
    if not isinstance(sink, sinks.EnvironmentSink):
        sink = sinks.DictSink(sink)
    return ParameterStoreBuildWrapper(
        credentials_id=credentials_id,
        region_name=region_name,
        path=path,
        recursive=recursive,
        naming=naming,
        name_prefixes=name_prefixes,
    ).set_up(env, sink)
