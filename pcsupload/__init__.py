"""
pcsupload - Async resumable sliced uploads for remote object storage.

Usage:
    >>> from pcsupload import Uploader
    >>> 
    >>> uploader = Uploader(client, slice_dir=".slices")
    >>> info = await uploader.upload_file("backup.tar", "/apps/backup.tar")
"""
import logging

from .core.upload import (
    Uploader,
    UploadCoordinator,
    UploadConfig,
    RetryConfig,
    Slice,
    SliceOwner,
    SliceStatus,
    RemoteFileInfo,
    RapidUploadResult,
    UploadProgress,
    SliceError,
    StorageClientProtocol,
    READ_ABORT
)
from .core.events import EventEmitter, EventAction
from .core.exceptions import UploadException, SliceStateError, SlicePlanningError

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for pcsupload modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'pcsupload',
        'pcsupload.upload',
        'pcsupload.upload.coordinator',
        'pcsupload.upload.slicing',
        'pcsupload.upload.slice',
        'pcsupload.upload.state',
        'pcsupload.upload.file',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'Uploader',
    'UploadCoordinator',
    'UploadConfig',
    'RetryConfig',
    'Slice',
    'SliceOwner',
    'SliceStatus',
    'RemoteFileInfo',
    'RapidUploadResult',
    'UploadProgress',
    'SliceError',
    'StorageClientProtocol',
    'READ_ABORT',
    'EventEmitter',
    'EventAction',
    'UploadException',
    'SliceStateError',
    'SlicePlanningError',
    'setup_logging',
]
