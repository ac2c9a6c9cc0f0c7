"""
Environment fallback: seed a parameter from the process environment.

Precedence
- explicit command-line text (applied later by the tokenizer through set/set_multi),
- then the first environment variable that is set, non-empty, and coerces,
- then the declared default (whatever the cell already holds).

A malformed environment value is never an error: it is logged at debug level
and the next candidate is tried, so "every candidate failed" and "nothing
configured" look the same to the caller.
"""
import logging
import os

from .faults import CoercionError
from .utils import split_names

logger = logging.getLogger(__name__)


def setfromenv(param, env_var, /, environ=None):
    """
    apply the first usable environment variable of `env_var` to `param`.

    parameters
    - param: Param
      target parameter; batch-capable parameters receive the value split on
      commas through set_multi(), the others receive it whole through set().
    - env_var: str
      space separated list of variable names, checked left to right.
    - environ: Mapping[str, str] | None
      environment to read from (os.environ when omitted).

    returns
    - the name of the variable that was applied, or None when no candidate
      applied and the cell keeps its declared default.
    """
    if not env_var:
        return None
    environ = os.environ if environ is None else environ
    batch = param.is_batch()

    for name in split_names(env_var):
        if not (value := environ.get(name, "")):
            continue
        try:
            if batch:
                param.set_multi(value.split(","))
            else:
                param.set(value)
        except CoercionError as exception:
            logger.debug("ignoring environment variable %s: %s", name, exception)
            continue
        logger.debug("%s seeded from environment variable %s", type(param).__name__, name)
        return name

    return None


__all__ = (
    "setfromenv",
)
