"""Per-subdirectory inclusion patterns.

A PatternSet decides which vendored files are eligible for installation.
Patterns are compiled eagerly so that a bad regular expression is reported
before any file is touched.
"""

import logging
import re
from collections.abc import Mapping
from typing import Optional

from dependency_installer.errors import ConfigurationError

logger = logging.getLogger(__name__)


class PatternSet:
    """Immutable mapping of subdirectory name to compiled regular expressions.

    Use :meth:`build` to construct one from configuration.
    """

    def __init__(self, patterns: Mapping[str, tuple[re.Pattern[str], ...]]) -> None:
        self._patterns = dict(patterns)

    @classmethod
    def build(cls, config: Optional[Mapping[str, Optional[str]]]) -> "PatternSet":
        """Compile inclusion patterns from configuration.

        Args:
            config: Mapping of subdirectory name to a comma-separated list of
                regular expressions, e.g. ``{"development": "jsf-.*,derby"}``.
                Subdirectories with an empty value are ignored.

        Returns:
            A PatternSet holding at least one subdirectory.

        Raises:
            ConfigurationError: If the config is empty or absent, if no
                subdirectory has a pattern, or if a pattern fails to compile.
        """
        if not config:
            raise ConfigurationError("Specify sub-directories to include")

        compiled: dict[str, tuple[re.Pattern[str], ...]] = {}

        for subdir, value in config.items():
            if not value or not value.strip():
                logger.debug(f"No inclusion pattern for sub-directory: {subdir}")
                continue

            patterns = []
            for expression in value.strip().split(","):
                expression = expression.strip()
                try:
                    patterns.append(re.compile(expression))
                except re.error as e:
                    raise ConfigurationError(
                        f"Invalid inclusion pattern '{expression}' "
                        f"for sub-directory '{subdir}': {e}"
                    ) from e

            compiled[subdir] = tuple(patterns)

        if not compiled:
            raise ConfigurationError("Specify inclusion regexp for sub-directories")

        return cls(compiled)

    def matches(self, subdirectory: str, file_name: str) -> bool:
        """Check whether a file is eligible for installation.

        Args:
            subdirectory: Subdirectory the file lives in.
            file_name: Bare file name (e.g., "foo-1.0.jar").

        Returns:
            True if the subdirectory is configured and at least one of its
            patterns matches the whole file name.
        """
        patterns = self._patterns.get(subdirectory)
        if not patterns:
            return False
        return any(pattern.fullmatch(file_name) for pattern in patterns)

    @property
    def subdirectories(self) -> list[str]:
        """Return the configured subdirectory names, sorted."""
        return sorted(self._patterns)

    def __contains__(self, subdirectory: object) -> bool:
        return subdirectory in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)
