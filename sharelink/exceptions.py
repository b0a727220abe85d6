# Sharelink Exceptions
# Errors raised at the metadata boundary

class SharelinkError(Exception):
    """Base class for sharelink errors."""


class MetadataError(SharelinkError):
    """Subscription or application metadata could not be read."""


class ApplicationNotFoundError(MetadataError):
    """A subscription refers to an application that does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Application not found: {name}")
        self.name = name
