"""Data models for hostpub."""
from hostpub.models.container import ContainerHandle, ExecResult
from hostpub.models.publish import PublishResult, PublishStatus

__all__ = [
    'ContainerHandle',
    'ExecResult',
    'PublishResult',
    'PublishStatus',
]
