"""
Slice upload service.

Drives a single slice through the remote upload-slice primitive.
"""
import time
from typing import Optional

from .file_service import AsyncFileReader
from ..models import Slice, SliceOwner, SliceStatus, SliceError, UploadProgress
from ..protocols import StorageClientProtocol, ReadFunction, READ_ABORT
from ...events import EventEmitter
from ...logging import get_logger


class SliceUploader:
    """
    Uploads one slice at a time.
    
    The transport pulls slice bytes through a read callback; every pull
    advances the slice and session progress and may emit a 'progress'
    event. A failed attempt rolls the slice's progress back to zero.
    
    Responsibilities:
    - Feed slice bytes to the transport on demand
    - Track per-slice and per-session progress
    - Translate the transport outcome into a slice status
    """
    
    def __init__(
        self,
        client: StorageClientProtocol,
        events: Optional[EventEmitter] = None,
        file_reader: Optional[AsyncFileReader] = None,
        progress_enabled: bool = False
    ):
        """
        Initialize slice uploader.
        
        Args:
            client: Remote storage client
            events: Emitter for 'progress' and 'error' events
            file_reader: Reader for slice bytes
            progress_enabled: Emit 'progress' after every pull
        """
        self._client = client
        self._events = events or EventEmitter()
        self._file_reader = file_reader or AsyncFileReader()
        self.progress_enabled = progress_enabled
        self._logger = get_logger('pcsupload.upload.slice')
    
    async def upload(self, slice_: Slice, owner: SliceOwner) -> bool:
        """
        Make one upload attempt for a slice.
        
        Args:
            slice_: Slice to upload
            owner: Session the slice belongs to
            
        Returns:
            True if the remote side confirmed the slice with a hash
        """
        if slice_.status == SliceStatus.PENDING:
            slice_.status = SliceStatus.UPLOADING
        elif slice_.status == SliceStatus.FAILED:
            slice_.status = SliceStatus.RETRYING
        
        started = time.time()
        self._logger.debug(
            f"Uploading slice {slice_.index} at offset {slice_.offset} ({slice_.length} bytes)"
        )
        
        try:
            info = await self._client.upload_slice(
                self._make_reader(slice_, owner), slice_, slice_.length
            )
        except Exception as e:
            elapsed = time.time() - started
            self._logger.warning(f"Slice {slice_.index} failed after {elapsed:.2f}s: {e}")
            owner.rollback(slice_)
            if slice_.status != SliceStatus.CANCELLED:
                slice_.status = SliceStatus.FAILED
                try:
                    cancel = self._events.emit('error', SliceError(slice=slice_, error=e))
                except Exception as handler_error:
                    self._logger.warning(f"Error handler failed for slice {slice_.index}: {handler_error}")
                    cancel = False
                if cancel:
                    self._logger.info(f"Upload cancelled after error on slice {slice_.index}")
                    owner.cancel(slice_)
            return False
        
        if info is None or not info.md5:
            owner.rollback(slice_)
            if slice_.status != SliceStatus.CANCELLED:
                slice_.status = SliceStatus.FAILED
                self._logger.warning(f"Slice {slice_.index} rejected: no hash returned")
            return False
        
        slice_.md5 = info.md5
        slice_.status = SliceStatus.SUCCEEDED
        elapsed = time.time() - started
        self._logger.debug(f"Slice {slice_.index} uploaded in {elapsed:.2f}s: {info.md5}")
        return True
    
    def _make_reader(self, slice_: Slice, owner: SliceOwner) -> ReadFunction:
        """Build the pull callback the transport reads slice bytes from."""
        
        async def read(size: int) -> Optional[bytes]:
            if owner.cancelled or slice_.status == SliceStatus.CANCELLED:
                return READ_ABORT
            
            count = min(size, slice_.remaining)
            if count <= 0:
                return b''
            
            try:
                data = await self._file_reader.read_range(
                    owner.file_path, slice_.offset + slice_.bytes_finished, count
                )
                owner.advance(slice_, len(data))
                
                if (self.progress_enabled and owner.total_size > 0
                        and self._events.has_listeners('progress')):
                    progress = UploadProgress(
                        uploaded_bytes=owner.bytes_finished,
                        total_bytes=owner.total_size
                    )
                    if self._events.emit('progress', progress):
                        self._logger.info(f"Upload cancelled during slice {slice_.index}")
                        owner.cancel(slice_)
                        return READ_ABORT
            except Exception as e:
                self._logger.warning(f"Reading slice {slice_.index} failed: {e}")
                owner.rollback(slice_)
                if slice_.status != SliceStatus.CANCELLED:
                    slice_.status = SliceStatus.FAILED
                return READ_ABORT
            
            return data
        
        return read
