class SetupFailure(Exception):
    """Raised when the parameter store client cannot be constructed.

    This is the only failure allowed to escape a fetch. Everything that
    happens after the client exists is reported and skipped instead.
    """


class FetchFailure(Exception):
    """Propagates an error returned by the remote parameter store.

    Carries the name or path being fetched and the underlying exception.
    """
    def __init__(self, target, exception):
        super(self.__class__, self).__init__("cannot fetch {}: {}".format(target, exception))
        self.target = target
        self.exception = exception


class TranslationFailure(Exception):
    pass


class LoadFailure(Exception):
    pass
