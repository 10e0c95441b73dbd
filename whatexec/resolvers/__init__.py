"""Command name resolvers.

`PathExecutableResolver` answers from `PATH`, `CachedPathExecutableResolver`
adds a TTL cache for the parsed `PATH` state, and `WhatExecutableResolver`
falls back to a filesystem scan when `PATH` has no answer.
"""

from .cached_resolver import CachedPathExecutableResolver
from .path_environment import PathEnvironment
from .path_resolver import PathExecutableResolver
from .what_resolver import WhatExecutableResolver

__all__ = [
    "CachedPathExecutableResolver",
    "PathEnvironment",
    "PathExecutableResolver",
    "WhatExecutableResolver",
]
