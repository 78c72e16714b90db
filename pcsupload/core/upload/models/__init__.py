"""Upload models."""
from .slice_models import Slice, SliceOwner, SliceStatus
from .upload_models import (
    RemoteFileInfo,
    RapidUploadResult,
    UploadProgress,
    SliceError
)

__all__ = [
    'Slice',
    'SliceOwner',
    'SliceStatus',
    'RemoteFileInfo',
    'RapidUploadResult',
    'UploadProgress',
    'SliceError'
]
