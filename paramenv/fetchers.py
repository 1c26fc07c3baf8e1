"""Copies parameters from a provider into an environment sink.

There are two ways of finding parameters. Without a path every parameter
whose name starts with one of the request's prefixes is listed, and then
each value is fetched one by one. With a path the values come back with
the listing, and the naming mode decides how much of each name is used.

Nothing raised by the provider escapes fetch(). Listing failures end the
listing, and per-parameter failures skip the parameter. Both are logged as
warnings. The only exception is failing to build the client at all.
"""

import logging
from typing import AnyStr
from typing import List
from typing import NamedTuple

from paramenv import config
from paramenv import exceptions
from paramenv import naming


logger = logging.getLogger(__name__)


def cause(error):
    """The remote error behind a failed Result, for logging."""
    return getattr(error, "exception", error)


class FetchReport(NamedTuple):
    bound: int
    failed: List[AnyStr]
    listing_abandoned: bool


class ParameterFetcher:
    def __init__(self, provider):
        self.provider = provider

    def fetch(self, request: config.FetchRequest, sink) -> FetchReport:
        if request.is_by_path:
            report = self.fetch_by_path(request, sink)
        else:
            report = self.fetch_by_name(request, sink)
        logger.info(
            "bound %d parameters, %d failed%s",
            report.bound,
            len(report.failed),
            ", listing abandoned" if report.listing_abandoned else "",
        )
        return report

    def list_names(self, request):
        names = []
        for page in self.provider.describe_parameters(request.name_prefixes):
            if not page.is_ok:
                logger.warning("cannot list parameters: %s", page.error, exc_info=cause(page.error))
                return names, True
            logger.debug("listed %d parameter names", len(page.value))
            names.extend(page.value)
        return names, False

    def fetch_by_name(self, request, sink):
        names, abandoned = self.list_names(request)
        bound = 0
        failed = []
        for name in names:
            resp = self.provider.get_parameter(name, decrypt=True)
            if not resp.is_ok:
                logger.warning("cannot fetch parameter %r: %s", name, resp.error, exc_info=cause(resp.error))
                failed.append(name)
            elif self.bind(resp.value, None, naming.NamingMode.Unspecified, sink):
                bound += 1
            else:
                failed.append(name)
        return FetchReport(bound=bound, failed=failed, listing_abandoned=abandoned)

    def fetch_by_path(self, request, sink):
        bound = 0
        failed = []
        pages = self.provider.get_parameters_by_path(request.path, recursive=request.recursive, decrypt=True)
        for page in pages:
            if not page.is_ok:
                logger.warning(
                    "cannot list parameters by path %r: %s", request.path, page.error,
                    exc_info=cause(page.error))
                return FetchReport(bound=bound, failed=failed, listing_abandoned=True)
            logger.debug("listed %d parameters under %r", len(page.value), request.path)
            for p in page.value:
                if self.bind(p, request.path, request.naming, sink):
                    bound += 1
                else:
                    failed.append(p.name)
        return FetchReport(bound=bound, failed=failed, listing_abandoned=False)

    @staticmethod
    def bind(p, path, naming_mode, sink):
        # noinspection PyBroadException
        try:
            key = naming.translate(p.name, path, naming_mode)
            if not key:
                raise exceptions.TranslationFailure("{!r} has no name relative to {!r}".format(p.name, path))
            sink.set(key, p.value)
        except Exception as e:
            logger.warning("cannot add parameter %r to environment: %s", p.name, e, exc_info=e)
            return False
        return True
