from .recorder import ViewRecorder, RecorderState, PlaybackSource, ViewerIdentity
from .scheduler import SamplingScheduler, SamplingHandle, AsyncioSamplingScheduler
from .session_identity import SessionIdentityProvider, TabSessionIdentity
from .writers import ViewWriter, StoreViewWriter, HttpViewWriter

__all__ = [
    "ViewRecorder",
    "RecorderState",
    "PlaybackSource",
    "ViewerIdentity",
    "SamplingScheduler",
    "SamplingHandle",
    "AsyncioSamplingScheduler",
    "SessionIdentityProvider",
    "TabSessionIdentity",
    "ViewWriter",
    "StoreViewWriter",
    "HttpViewWriter"
]
