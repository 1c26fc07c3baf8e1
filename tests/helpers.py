from paramenv import aws
from paramenv import config
from paramenv import exceptions
from paramenv import sinks


def matches_prefixes(name, name_prefixes):
    """Starts-with filtering, as the parameter store applies BeginsWith."""
    if not name_prefixes:
        return True
    return any(name.startswith(p) for p in name_prefixes)


class FakeProvider(aws.ParameterProvider):
    """In-memory provider with failures injected by name or page number.

    parameters maps names to values. Listings are returned page_size at a
    time in name order.
    """
    def __init__(
            self,
            parameters=None,
            page_size=1,
            failing_names=(),
            fail_listing_on_page=None,
            **kwargs
    ):
        self.parameters = dict(parameters or {})
        self.page_size = page_size
        self.failing_names = set(failing_names)
        self.fail_listing_on_page = fail_listing_on_page
        self.settings = kwargs
        self.calls = []
        self.connected = False

    def connect(self):
        self.connected = True

    def pages(self, items, target):
        for i, start in enumerate(range(0, len(items), self.page_size)):
            if i == self.fail_listing_on_page:
                yield config.Result.failed(exceptions.FetchFailure(target, RuntimeError("page %d" % i)))
                return
            yield config.Result.ok(items[start:start+self.page_size])

    def describe_parameters(self, name_prefixes=()):
        self.calls.append(("describe_parameters", tuple(name_prefixes)))
        names = [n for n in sorted(self.parameters) if matches_prefixes(n, name_prefixes)]
        return self.pages(names, ",".join(name_prefixes))

    def get_parameter(self, name, decrypt=True):
        self.calls.append(("get_parameter", name, decrypt))
        if name in self.failing_names or name not in self.parameters:
            return config.Result.failed(exceptions.FetchFailure(name, KeyError(name)))
        return config.Result.ok(config.Parameter(name, self.parameters[name]))

    def get_parameters_by_path(self, path, recursive=False, decrypt=True):
        self.calls.append(("get_parameters_by_path", path, recursive, decrypt))
        root = path.rstrip("/") + "/"
        found = []
        for name in sorted(self.parameters):
            if not name.startswith(root):
                continue
            if not recursive and "/" in name[len(root):]:
                continue
            found.append(config.Parameter(name, self.parameters[name]))
        return self.pages(found, path)


class FailingSink(sinks.DictSink):
    """Refuses to set the listed keys."""
    def __init__(self, refused=()):
        super().__init__()
        self.refused = set(refused)

    def set(self, key, value):
        if key in self.refused:
            raise RuntimeError("refused %s" % key)
        super().set(key, value)
