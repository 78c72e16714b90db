"""
Upload facade.

Provides a simplified interface for file uploads.
Follows Facade Pattern - hides complexity of the upload subsystem.
"""
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Union

from .config import UploadConfig
from .coordinator import UploadCoordinator
from .models import RemoteFileInfo
from .protocols import StorageClientProtocol, SlicingStrategy
from ..events import EventEmitter


class Uploader:
    """
    Simplified interface for resumable file uploads.
    
    This is the main entry point for uploading files. Subscribe to
    'progress' (UploadProgress) and 'error' (SliceError) events; a
    handler returning EventAction.CANCEL cancels the running upload.
    
    Example:
        >>> from pcsupload import Uploader, EventAction
        >>> uploader = Uploader(client, slice_dir="/var/lib/app/slices")
        >>> uploader.progress_enabled = True
        >>> uploader.on('progress', lambda p: print(f"{p.percentage:.1f}%"))
        >>> info = await uploader.upload_file("video.mkv", "/apps/backup/video.mkv")
        >>> if info is None:
        ...     print("Incomplete, call again to resume")
    """
    
    def __init__(
        self,
        client: StorageClientProtocol,
        slice_dir: str = '',
        config: Optional[UploadConfig] = None,
        slicing_strategy: Optional[SlicingStrategy] = None
    ):
        """
        Initialize uploader.
        
        Args:
            client: Remote storage client
            slice_dir: Directory for slice state files (overrides config)
            config: Upload configuration
            slicing_strategy: Optional custom slicing strategy
        """
        self._config = config or UploadConfig.default()
        if slice_dir:
            self._config = replace(self._config, slice_dir=slice_dir)
        self._events = EventEmitter()
        self._coordinator = UploadCoordinator(
            client,
            config=self._config,
            events=self._events,
            slicing_strategy=slicing_strategy
        )
    
    @property
    def config(self) -> UploadConfig:
        return self._config
    
    @property
    def rapid_upload_enabled(self) -> bool:
        return self._config.rapid_upload_enabled
    
    @rapid_upload_enabled.setter
    def rapid_upload_enabled(self, value: bool) -> None:
        self._config.rapid_upload_enabled = value
    
    @property
    def slice_upload_enabled(self) -> bool:
        """Sliced upload supports resuming interrupted uploads."""
        return self._config.slice_upload_enabled
    
    @slice_upload_enabled.setter
    def slice_upload_enabled(self, value: bool) -> None:
        self._config.slice_upload_enabled = value
    
    @property
    def progress_enabled(self) -> bool:
        return self._config.progress_enabled
    
    @progress_enabled.setter
    def progress_enabled(self, value: bool) -> None:
        self._config.progress_enabled = value
    
    @property
    def slice_dir(self) -> str:
        return self._config.slice_dir
    
    @slice_dir.setter
    def slice_dir(self, value: str) -> None:
        self._config.slice_dir = value
    
    def on(self, event: str, callback: Callable) -> 'Uploader':
        """Register a handler for 'progress' or 'error'."""
        self._events.on(event, callback)
        return self
    
    def off(self, event: str, callback: Optional[Callable] = None) -> 'Uploader':
        """Remove a handler, or every handler of event."""
        self._events.off(event, callback)
        return self
    
    async def upload_file(
        self,
        local_path: Union[str, Path],
        remote_path: str,
        overwrite: bool = False
    ) -> Optional[RemoteFileInfo]:
        """
        Upload a file.
        
        Files up to the minimum slice size go up in a single request.
        Larger files first try rapid upload, then sliced upload, which
        resumes where a previous call for the same file stopped.
        
        Args:
            local_path: Local file to upload
            remote_path: Remote absolute path
            overwrite: Replace an existing remote file instead of
                letting the remote side rename the new one
            
        Returns:
            Remote file metadata, or None if nothing was completed
        """
        return await self._coordinator.upload_file(local_path, remote_path, overwrite)
