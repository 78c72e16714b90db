"""
Upload module for resumable sliced file uploads.

This module provides a clean interface for uploading files to remote
object storage. Slicing is pluggable through strategies; the remote
storage client is injected.
"""
from .facade import Uploader
from .coordinator import UploadCoordinator
from .config import (
    UploadConfig,
    RetryConfig,
    MIN_UPLOAD_SLICE_SIZE,
    MAX_UPLOAD_SLICE_SIZE,
    MAX_UPLOAD_SLICE_COUNT
)
from .models import (
    Slice,
    SliceOwner,
    SliceStatus,
    RemoteFileInfo,
    RapidUploadResult,
    UploadProgress,
    SliceError
)
from .protocols import (
    StorageClientProtocol,
    SlicingStrategy,
    ReadFunction,
    READ_ABORT
)

__all__ = [
    # Main classes
    'Uploader',
    'UploadCoordinator',
    
    # Configuration
    'UploadConfig',
    'RetryConfig',
    'MIN_UPLOAD_SLICE_SIZE',
    'MAX_UPLOAD_SLICE_SIZE',
    'MAX_UPLOAD_SLICE_COUNT',
    
    # Models
    'Slice',
    'SliceOwner',
    'SliceStatus',
    'RemoteFileInfo',
    'RapidUploadResult',
    'UploadProgress',
    'SliceError',
    
    # Protocols
    'StorageClientProtocol',
    'SlicingStrategy',
    'ReadFunction',
    'READ_ABORT',
]
