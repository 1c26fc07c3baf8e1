import re
from typing import AnyStr
from typing import Optional

from paramenv import sinks


class ExpandableString:
    def __init__(self, name):
        self.name = name
        self.expansions = expansions(name)

    def expand(self, env: sinks.AmbientEnvironment) -> Optional[AnyStr]:
        return expand(self.name, self.expansions, env)


expansions_ptrn = re.compile(r"\{([^}]+)}")


def expansions(tmpl):
    return set(expansions_ptrn.findall(tmpl))


def expand(tmpl, expansions, env: sinks.AmbientEnvironment) -> Optional[AnyStr]:
    """Replaces each {VAR} with its value from env.

    Returns None if any referenced variable is missing.
    """
    replacements = []
    for exp in expansions:
        if exp not in env:
            return None
        replacements.append(('{%s}' % exp, env[exp]))
    t = tmpl
    for exp, v in replacements:
        t = t.replace(exp, v)
    return t
