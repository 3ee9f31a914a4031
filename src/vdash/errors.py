"""Custom exceptions for vdash."""


class VDashError(Exception):
    """Base exception for vdash."""

    pass


class TemplateError(VDashError):
    """Stage template edit would break template consistency."""

    pass


class VideoNotFoundError(VDashError):
    """No draft or published video has the requested id."""

    pass


class DerivedTaskError(VDashError):
    """A derived checklist task cannot be toggled manually."""

    pass


class BackupValidationError(VDashError):
    """Backup document does not have the expected structure."""

    pass


class StateStoreError(VDashError):
    """Persisted state could not be read or written."""

    pass
