"""Pytest fixtures for pcsupload tests."""
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from Crypto.Hash import MD5

from pcsupload import EventAction, RemoteFileInfo, RapidUploadResult, UploadConfig


def md5_hex(data: bytes) -> str:
    return MD5.new(data).hexdigest()


class FakeStorageClient:
    """
    In-memory remote storage.
    
    Slices are pulled through the read callback in read_size pieces,
    like a transport filling its send buffer.
    """
    
    def __init__(self, read_size: int = 256):
        self.read_size = read_size
        self.blocks: Dict[str, bytes] = {}
        self.files: Dict[str, bytes] = {}
        self.attempts: List[int] = []
        self.merges: List[List[str]] = []
        self.direct_uploads: List[str] = []
        self.rapid_calls = 0
        self.md5_calls = 0
        # index -> number of attempts that raise after one pull
        self.failures: Dict[int, int] = {}
        # index -> number of attempts answered without a hash
        self.rejections: Dict[int, int] = {}
        self.rapid_info: Optional[RemoteFileInfo] = None
        self.merge_fails = False
    
    async def md5_file(self, local_path: str) -> Optional[str]:
        self.md5_calls += 1
        return md5_hex(Path(local_path).read_bytes())
    
    async def rapid_upload(self, remote_path, local_path, overwrite):
        self.rapid_calls += 1
        file_md5 = md5_hex(Path(local_path).read_bytes())
        return RapidUploadResult(file_info=self.rapid_info, file_md5=file_md5)
    
    async def upload(self, remote_path, local_path, overwrite, progress=None):
        data = Path(local_path).read_bytes()
        total = len(data)
        if progress is not None:
            for sent in range(0, total + 1, self.read_size):
                if progress(sent, total) is EventAction.CANCEL:
                    return None
        self.direct_uploads.append(remote_path)
        self.files[remote_path] = data
        return RemoteFileInfo(path=remote_path, size=total, md5=md5_hex(data))
    
    async def upload_slice(self, read, slice_, size):
        self.attempts.append(slice_.index)
        fail = self.failures.get(slice_.index, 0) > 0
        if fail:
            self.failures[slice_.index] -= 1
        
        received = []
        total = 0
        while total < size:
            data = await read(min(self.read_size, size - total))
            if data is None:
                return RemoteFileInfo()
            if not data:
                break
            received.append(data)
            total += len(data)
            if fail:
                raise ConnectionError("connection reset by peer")
        
        if self.rejections.get(slice_.index, 0) > 0:
            self.rejections[slice_.index] -= 1
            return RemoteFileInfo()
        
        blob = b''.join(received)
        block_md5 = md5_hex(blob)
        self.blocks[block_md5] = blob
        return RemoteFileInfo(md5=block_md5, size=len(blob))
    
    async def create_superfile(self, remote_path, block_list, overwrite):
        self.merges.append(list(block_list))
        if self.merge_fails:
            return None
        data = b''.join(self.blocks[h] for h in block_list)
        self.files[remote_path] = data
        return RemoteFileInfo(path=remote_path, size=len(data), md5=md5_hex(data))


@pytest.fixture
def client():
    """Fake remote storage client."""
    return FakeStorageClient()


@pytest.fixture
def make_file(tmp_path):
    """Factory creating a file of the given size with varied content."""
    def _make(size: int, name: str = 'source.bin') -> Path:
        pattern = bytes(range(251))
        data = (pattern * (size // len(pattern) + 1))[:size]
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _make


@pytest.fixture
def slice_dir(tmp_path):
    """Directory for slice state files."""
    return tmp_path / 'slices'


@pytest.fixture
def config(slice_dir):
    """Small slices so test files stay tiny."""
    return UploadConfig(
        min_slice_size=1024,
        max_slice_count=8,
        slice_dir=str(slice_dir)
    )
