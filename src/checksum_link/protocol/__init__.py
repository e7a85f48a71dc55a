"""Protocol layer: frame codec, result codes, and error types."""

from .errors import (
    ChannelError,
    ChecksumLinkError,
    ConfigurationError,
    InvalidFormatError,
    MalformedFrameError,
)
from .framing import build_frame, split_frame
from .results import ResultCode
