"""
Upload coordinator.

Orchestrates the upload process using injected dependencies.
Follows Dependency Inversion Principle - depends on abstractions, not concretions.
"""
import asyncio
import time
from pathlib import Path
from typing import List, Optional, Union

from .config import UploadConfig
from .models import (
    RemoteFileInfo,
    RapidUploadResult,
    Slice,
    SliceOwner,
    SliceStatus,
    UploadProgress
)
from .protocols import StorageClientProtocol, SlicingStrategy, LoggerProtocol
from .services import FileValidator, AsyncFileReader, SliceStateStore, SliceUploader
from .strategies import PcsSlicingStrategy
from ..events import EventEmitter, EventAction
from ..exceptions import SliceStateError, SlicePlanningError
from ..logging import get_logger


class UploadCoordinator:
    """
    Coordinates the file upload process.
    
    Picks the cheapest strategy that applies to a file:
    - rapid upload, when the remote side already has the content
    - sliced upload, resumable across sessions through a state file
    - direct upload of the whole file in one request
    
    A failed slice is retried until it succeeds or the session is
    cancelled. Nothing is raised for transfer problems; upload_file()
    returns None instead and leaves the state file for the next call.
    """
    
    def __init__(
        self,
        client: StorageClientProtocol,
        config: Optional[UploadConfig] = None,
        events: Optional[EventEmitter] = None,
        slicing_strategy: Optional[SlicingStrategy] = None,
        state_store: Optional[SliceStateStore] = None,
        file_reader: Optional[AsyncFileReader] = None,
        logger: Optional[LoggerProtocol] = None
    ):
        """
        Initialize upload coordinator.
        
        Args:
            client: Remote storage client
            config: Upload configuration
            events: Emitter for 'progress' and 'error' events
            slicing_strategy: Strategy for partitioning files
            state_store: Store for slice checkpoints
            file_reader: Reader for slice bytes
            logger: Logger instance
        """
        self._client = client
        self._config = config or UploadConfig.default()
        self._events = events or EventEmitter()
        self._slicing = slicing_strategy or PcsSlicingStrategy(
            min_slice_size=self._config.min_slice_size,
            max_slice_count=self._config.max_slice_count,
            max_slice_size=self._config.max_slice_size
        )
        self._owns_store = state_store is None
        self._store = state_store or SliceStateStore(self._config.slice_dir)
        self._validator = FileValidator()
        self._slice_uploader = SliceUploader(
            client,
            events=self._events,
            file_reader=file_reader,
            progress_enabled=self._config.progress_enabled
        )
        self._logger = logger or get_logger('pcsupload.upload.coordinator')
    
    @property
    def config(self) -> UploadConfig:
        return self._config
    
    @property
    def events(self) -> EventEmitter:
        return self._events
    
    @property
    def state_store(self) -> SliceStateStore:
        return self._store
    
    async def upload_file(
        self,
        local_path: Union[str, Path],
        remote_path: str,
        overwrite: bool = False
    ) -> Optional[RemoteFileInfo]:
        """
        Upload a local file to remote_path.
        
        Args:
            local_path: Local file to upload
            remote_path: Remote absolute path
            overwrite: Replace an existing remote file
            
        Returns:
            Metadata of the remote file, or None if the upload failed,
            was cancelled or is still incomplete
            
        Raises:
            FileNotFoundError: If the local file doesn't exist
            ValueError: If local_path is not a regular file
        """
        path, file_size = self._validator.validate(local_path)
        local = str(path)
        config = self._config
        self._slice_uploader.progress_enabled = config.progress_enabled
        if self._owns_store:
            self._store.slice_dir = config.slice_dir
        
        file_size_mb = file_size / (1024 * 1024)
        self._logger.info(f"Starting upload: {local} -> {remote_path} ({file_size_mb:.2f} MB)")
        
        sliceable = file_size > config.min_slice_size
        file_md5 = ''
        
        if config.rapid_upload_enabled and sliceable:
            result = await self._rapid_upload(local, remote_path, overwrite)
            if result is not None:
                if result.succeeded:
                    self._logger.info(f"Rapid upload succeeded: {result.file_info.path}")
                    return result.file_info
                file_md5 = result.file_md5
        
        if config.slice_upload_enabled and sliceable:
            return await self._upload_sliced(local, remote_path, overwrite, file_size, file_md5)
        
        return await self._upload_direct(local, remote_path, overwrite)
    
    async def _rapid_upload(
        self,
        local: str,
        remote_path: str,
        overwrite: bool
    ) -> Optional[RapidUploadResult]:
        """Try a content-addressed upload."""
        self._logger.debug(f"Trying rapid upload of {local}")
        try:
            return await self._client.rapid_upload(remote_path, local, overwrite)
        except Exception as e:
            self._logger.warning(f"Rapid upload failed: {e}")
            return None
    
    async def _upload_direct(
        self,
        local: str,
        remote_path: str,
        overwrite: bool
    ) -> Optional[RemoteFileInfo]:
        """Upload the whole file in one request."""
        self._logger.info(f"Uploading {local} in a single request")
        progress = self._on_transfer_progress if self._config.progress_enabled else None
        started = time.time()
        try:
            info = await self._client.upload(remote_path, local, overwrite, progress=progress)
        except Exception as e:
            self._logger.error(f"Direct upload of {local} failed: {e}")
            return None
        
        if info is None or info.is_empty:
            self._logger.error(f"Direct upload of {local} returned no file")
            return None
        
        self._logger.info(f"Direct upload completed in {time.time() - started:.2f}s: {info.path}")
        return info
    
    def _on_transfer_progress(self, uploaded: int, total: int) -> EventAction:
        """Whole-file progress hook handed to the transport."""
        if total >= 1:
            progress = UploadProgress(uploaded_bytes=uploaded, total_bytes=total)
            if self._events.emit('progress', progress):
                self._logger.info("Direct upload cancelled")
                return EventAction.CANCEL
        return EventAction.CONTINUE
    
    async def _upload_sliced(
        self,
        local: str,
        remote_path: str,
        overwrite: bool,
        file_size: int,
        file_md5: str
    ) -> Optional[RemoteFileInfo]:
        """Resumable sliced upload."""
        if not file_md5:
            try:
                file_md5 = await self._hash_file(local)
            except SlicePlanningError as e:
                self._logger.error(f"Cannot plan sliced upload: {e}")
                return None
        
        owner = SliceOwner(file_path=local, total_size=file_size)
        state_path = self._store.path_for(local, file_md5)
        slices = await self._load_slices(state_path, owner)
        
        self._logger.info(
            f"Uploading {len(slices)} slices "
            f"({owner.bytes_finished} of {file_size} bytes already uploaded)"
        )
        await self._upload_slices(slices, owner, state_path)
        
        if owner.cancelled:
            self._logger.info(f"Upload of {local} cancelled, state kept at {state_path}")
            return None
        
        pending = [s.index for s in slices if not s.succeeded]
        if pending:
            self._logger.warning(f"{len(pending)} slices not uploaded, state kept at {state_path}")
            return None
        
        return await self._merge(slices, remote_path, overwrite, state_path)
    
    async def _hash_file(self, local: str) -> str:
        """Returns the content hash of local."""
        try:
            file_md5 = await self._client.md5_file(local)
        except Exception as e:
            raise SlicePlanningError(f"Hashing {local} failed: {e}") from e
        if not file_md5:
            raise SlicePlanningError(f"No hash computed for {local}")
        return file_md5
    
    async def _load_slices(self, state_path: Path, owner: SliceOwner) -> List[Slice]:
        """Resume from a checkpoint, or plan and checkpoint a new slice list."""
        if await self._store.exists(state_path):
            try:
                return await self._store.restore(state_path, owner)
            except (SliceStateError, OSError) as e:
                self._logger.warning(f"Discarding unusable slice state {state_path}: {e}")
                owner.bytes_finished = 0
        
        slices = self._slicing.plan(owner.total_size)
        await self._checkpoint(state_path, slices)
        return slices
    
    async def _upload_slices(
        self,
        slices: List[Slice],
        owner: SliceOwner,
        state_path: Path
    ) -> None:
        """Upload slices in index order, checkpointing after each success."""
        retry = self._config.retry
        
        for slice_ in slices:
            if owner.cancelled:
                break
            if slice_.succeeded:
                continue
            if slice_.status != SliceStatus.PENDING:
                slice_.status = SliceStatus.RETRYING
            
            retries = 0
            while not await self._slice_uploader.upload(slice_, owner):
                if slice_.status.is_terminal or owner.cancelled:
                    break
                if not retry.should_retry(retries):
                    self._logger.warning(f"Giving up on slice {slice_.index} after {retries} retries")
                    break
                delay = retry.calculate_delay(retries)
                retries += 1
                self._logger.debug(f"Retrying slice {slice_.index} (attempt {retries + 1})")
                if delay > 0:
                    await asyncio.sleep(delay)
            
            if slice_.status == SliceStatus.CANCELLED:
                owner.cancelled = True
            if slice_.succeeded:
                await self._checkpoint(state_path, slices)
    
    async def _checkpoint(self, state_path: Path, slices: List[Slice]) -> None:
        try:
            await self._store.save(state_path, slices)
        except (OSError, ValueError) as e:
            self._logger.warning(f"Could not save slice state {state_path}: {e}")
    
    async def _merge(
        self,
        slices: List[Slice],
        remote_path: str,
        overwrite: bool,
        state_path: Path
    ) -> Optional[RemoteFileInfo]:
        """Merge uploaded slices into the remote file."""
        block_list = [s.md5 for s in sorted(slices, key=lambda s: s.index)]
        self._logger.info(f"Merging {len(block_list)} slices into {remote_path}")
        try:
            info = await self._client.create_superfile(remote_path, block_list, overwrite)
        except Exception as e:
            self._logger.error(f"Merging slices into {remote_path} failed: {e}")
            return None
        
        if info is None or info.is_empty:
            self._logger.error(f"Merging slices into {remote_path} returned no file")
            return None
        
        try:
            await self._store.delete(state_path)
        except OSError as e:
            self._logger.warning(f"Could not delete slice state {state_path}: {e}")
        
        self._logger.info(f"Upload completed: {info.path}")
        return info
