"""Exception hierarchy for the conversion pipeline."""

from __future__ import annotations


class WebifyError(Exception):
    """Base class for errors that abort a conversion."""


class ExtractionError(WebifyError):
    """Repository metadata could not be extracted."""


class ManifestParseError(ExtractionError):
    """A manifest file exists but could not be read or parsed."""

    def __init__(self, manifest: str, reason: str):
        self.manifest = manifest
        self.reason = reason
        super().__init__(f"failed to analyze repository: {manifest}: {reason}")


class CloneError(WebifyError):
    """Cloning the repository failed."""


class GenerationError(WebifyError):
    """Scaffolding or building the web application failed."""


class DeploymentError(WebifyError):
    """Deploying the built application failed."""
