"""
Memory pre-flight checks for loading local RDF documents.

rdflib keeps roughly 3-4x the size of a document in memory while the
scratch graph is built, on top of the translated graph. Checking the file
size against available memory before parsing turns an out-of-memory crash
into an ordinary load failure.

Example:
    ```python
    manager = MemoryManager(max_safe_file_mb=200)
    can_proceed, message = manager.check_memory_available(file_size_mb)

    # Or raise ResourceLimitError directly
    manager.ensure_file_fits(path)
    ```
"""

import logging
import os
from typing import Tuple, Union

import psutil

from ..constants import MemoryLimits
from .errors import ResourceLimitError

logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024


class MemoryManager:
    """
    Estimate whether a document can be parsed with the memory available.

    Attributes:
        max_safe_file_mb: Largest file accepted without ``force``
        min_available_mb: Minimum free memory required to start a parse
        memory_multiplier: Estimated memory/file size ratio
        load_factor: Fraction of available memory treated as safe
    """

    def __init__(
        self,
        max_safe_file_mb: float = MemoryLimits.MAX_SAFE_FILE_MB,
        min_available_mb: float = MemoryLimits.MIN_AVAILABLE_MEMORY_MB,
        memory_multiplier: float = MemoryLimits.MEMORY_MULTIPLIER,
        load_factor: float = MemoryLimits.LOAD_FACTOR,
    ):
        self.max_safe_file_mb = max_safe_file_mb
        self.min_available_mb = min_available_mb
        self.memory_multiplier = memory_multiplier
        self.load_factor = load_factor

    @staticmethod
    def get_available_memory_mb() -> float:
        """
        Get available system memory in MB.

        Returns:
            Available memory in MB, or infinity if the OS query fails.
        """
        try:
            return psutil.virtual_memory().available / _BYTES_PER_MB
        except (OSError, RuntimeError) as e:
            logger.warning(f"Could not determine available memory: {e}")
            return float('inf')

    def check_memory_available(self, file_size_mb: float, force: bool = False) -> Tuple[bool, str]:
        """
        Check if enough memory is available to parse a file.

        Args:
            file_size_mb: Size of the file in MB.
            force: If True, accept files above the safe limit and files
                whose estimate exceeds the safe threshold (with a warning).

        Returns:
            Tuple of (can_proceed: bool, message: str)
        """
        estimated_usage_mb = file_size_mb * self.memory_multiplier

        if not force and file_size_mb > self.max_safe_file_mb:
            return False, (
                f"File size ({file_size_mb:.1f}MB) exceeds safe limit ({self.max_safe_file_mb}MB). "
                f"Estimated memory required: ~{estimated_usage_mb:.0f}MB. "
                f"Set force_large_file to load it anyway."
            )

        available_mb = self.get_available_memory_mb()
        if available_mb == float('inf'):
            return True, f"Memory check unavailable. Proceeding with {file_size_mb:.1f}MB file."

        if available_mb < self.min_available_mb:
            return False, (
                f"Insufficient free memory. "
                f"Available: {available_mb:.0f}MB, "
                f"Minimum required: {self.min_available_mb}MB."
            )

        safe_threshold_mb = available_mb * self.load_factor
        if estimated_usage_mb > safe_threshold_mb:
            if force:
                return True, (
                    f"WARNING: File may exceed safe memory limits. "
                    f"File: {file_size_mb:.1f}MB, "
                    f"Estimated usage: ~{estimated_usage_mb:.0f}MB, "
                    f"Safe threshold: {safe_threshold_mb:.0f}MB."
                )
            return False, (
                f"Document may be too large for available memory. "
                f"File size: {file_size_mb:.1f}MB, "
                f"Estimated parsing memory: ~{estimated_usage_mb:.0f}MB, "
                f"Safe threshold: {safe_threshold_mb:.0f}MB "
                f"(Available: {available_mb:.0f}MB)."
            )

        return True, (
            f"Memory OK: File {file_size_mb:.1f}MB, "
            f"estimated usage ~{estimated_usage_mb:.0f}MB of {available_mb:.0f}MB available"
        )

    def ensure_file_fits(self, path: Union[str, os.PathLike], force: bool = False) -> float:
        """
        Run the pre-flight check for a local file.

        Returns:
            The file size in MB.

        Raises:
            ResourceLimitError: If the check fails.
        """
        file_size_mb = os.path.getsize(path) / _BYTES_PER_MB
        can_proceed, message = self.check_memory_available(file_size_mb, force=force)
        if not can_proceed:
            logger.error(f"Memory check failed: {message}")
            raise ResourceLimitError(message)
        logger.debug(f"Memory check: {message}")
        return file_size_mb
