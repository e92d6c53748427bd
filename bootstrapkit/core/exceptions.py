"""
Centralized exception hierarchy for BootstrapKit.

This module defines all custom exceptions used across the codebase.
Failures inside a single candidate attempt are reported with one of these
types; the candidate orchestrator decides whether they are fatal.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class BootstrapKitError(Exception):
    """Base exception for all BootstrapKit errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(BootstrapKitError):
    """Malformed input such as a bad repository identity or unsupported platform."""

    pass


# ============================================================================
# Resolution Exceptions
# ============================================================================


class ResolutionError(BootstrapKitError):
    """No matching tag, release or asset could be found."""

    pass


class RefNotFoundError(ResolutionError):
    """Raised when a git ref does not exist in the registry."""

    def __init__(self, repository: str, ref: str):
        self.repository = repository
        self.ref = ref
        super().__init__(f"Ref not found in {repository}: {ref}")


class ReleaseNotFoundError(ResolutionError):
    """Raised when a release does not exist for the requested tag."""

    def __init__(self, repository: str, tag: str):
        self.repository = repository
        self.tag = tag
        super().__init__(f"Release not found in {repository}: {tag}")


# ============================================================================
# Transport Exceptions
# ============================================================================


class TransportError(BootstrapKitError):
    """Network or registry communication failure."""

    pass


# ============================================================================
# Extraction Exceptions
# ============================================================================


class ExtractionError(BootstrapKitError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Cache and State Exceptions
# ============================================================================


class CacheError(BootstrapKitError):
    """Base exception for tool cache errors."""

    pass


class CacheLockTimeout(CacheError):
    """Raised when a cache entry lock cannot be acquired within timeout."""

    pass


class StateError(BootstrapKitError):
    """Run state could not be loaded or saved."""

    pass


# ============================================================================
# Execution Exceptions
# ============================================================================


class ExecutionError(BootstrapKitError):
    """Invalid or failing command."""

    def __init__(self, message: str, exit_code: int = 0):
        self.exit_code = exit_code
        super().__init__(message)
