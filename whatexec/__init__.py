"""Top-level package for WhatExec.

WhatExec resolves command names to executable files, first from `PATH` and then
by scanning local drives. The main entry point is `WhatExecutableResolver`;
`ResolverFactory` assembles it from a `WhatExecConfig`.
"""

from loguru import logger

from .config import ConfigLoader, WhatExecConfig
from .detection import ExecutableDetector, LocationPrioritizer, create_executable_detector
from .errors import (
    EnvironmentUnavailableError,
    ExecutableNotFoundError,
    InvalidCommandError,
    PlatformNotSupportedError,
    SearchCancelledError,
    WhatExecError,
)
from .locators import (
    ExecutableFileInstancesLocator,
    ExecutableFileLocator,
    MultiExecutableLocator,
)
from .models import ResolvedExecutable, SearchOption
from .resolver_factory import ResolverFactory
from .resolvers import (
    CachedPathExecutableResolver,
    PathExecutableResolver,
    WhatExecutableResolver,
)

logger.disable("whatexec")

__all__ = [
    "CachedPathExecutableResolver",
    "ConfigLoader",
    "EnvironmentUnavailableError",
    "ExecutableDetector",
    "ExecutableFileInstancesLocator",
    "ExecutableFileLocator",
    "ExecutableNotFoundError",
    "InvalidCommandError",
    "LocationPrioritizer",
    "MultiExecutableLocator",
    "PathExecutableResolver",
    "PlatformNotSupportedError",
    "ResolvedExecutable",
    "ResolverFactory",
    "SearchCancelledError",
    "SearchOption",
    "WhatExecConfig",
    "WhatExecError",
    "WhatExecutableResolver",
    "__version__",
    "create_executable_detector",
]

__version__ = "0.1.0"
