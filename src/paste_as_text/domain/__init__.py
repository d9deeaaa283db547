from .errors import (
    Cancelled,
    ExtractError,
    InvalidConfiguration,
    InvalidImageFormat,
    NotConfigured,
    ParseError,
    PasteAsTextError,
    RateLimited,
    RemoteError,
    StoreError,
    TransportError,
)
from .models import (
    BackendConfiguration,
    BackendId,
    ChannelBackup,
    ExtractedText,
    ImageContent,
    ImageSource,
    RetryPolicy,
    SourceKind,
)

__all__ = [
    "BackendConfiguration",
    "BackendId",
    "Cancelled",
    "ChannelBackup",
    "ExtractError",
    "ExtractedText",
    "ImageContent",
    "ImageSource",
    "InvalidConfiguration",
    "InvalidImageFormat",
    "NotConfigured",
    "ParseError",
    "PasteAsTextError",
    "RateLimited",
    "RemoteError",
    "RetryPolicy",
    "SourceKind",
    "StoreError",
    "TransportError",
]
