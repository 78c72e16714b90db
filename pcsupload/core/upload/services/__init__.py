"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader
from .state_store import SliceStateStore, RECORD_SIZE
from .slice_service import SliceUploader

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'SliceStateStore',
    'SliceUploader',
    'RECORD_SIZE',
]
