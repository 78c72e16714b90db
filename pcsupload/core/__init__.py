"""Core components of pcsupload."""
