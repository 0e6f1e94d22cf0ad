"""Exceptions raised by the self-update pipeline."""


class UpdateError(Exception):
    """Base class for every self-update failure."""

    pass


class FetchError(UpdateError):
    """Raised when a release listing or asset cannot be fetched or decoded."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class InvalidSourceFormat(UpdateError):
    """Raised when a repository string is not of the form ``owner/project``."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Repository must be in format 'owner/repo', got {value!r}")


class NoReleasesFound(UpdateError):
    """Raised when no source contributed any release."""

    pass


class ReleaseNotFound(UpdateError):
    """Raised when a requested version is not among the discovered releases."""

    pass


class NoSuitableAsset(UpdateError):
    """Raised when a release has no asset for the target platform."""

    pass


class ExtractError(UpdateError):
    """Raised when the executable cannot be recovered from a downloaded asset."""

    pass


class UnsupportedAssetFormat(ExtractError):
    """Raised for an asset whose suffix is not .zst, .tar.gz or .zip."""

    def __init__(self, asset_name: str):
        self.asset_name = asset_name
        super().__init__(f"Unsupported asset format: {asset_name}")


class BinaryNotFoundInArchive(ExtractError):
    """Raised when no archive member looks like the executable."""

    def __init__(self, asset_name: str, executable_name: str):
        self.asset_name = asset_name
        self.executable_name = executable_name
        super().__init__(f"Could not find {executable_name} binary in {asset_name}")


class ReplaceError(UpdateError):
    """Raised when the running executable cannot be substituted."""

    pass
