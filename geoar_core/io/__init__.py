"""
I/O Module: boundaries to the host application.

- LocationStream: bounded, single-consumer delivery of location fixes,
  pausable while the consuming surface is hidden
- AnchorSink: placement requests out, anchor count / tracking state back
"""

from .anchor_sink import (
    AnchorSink,
    InMemoryAnchorSink,
)
from .location_stream import (
    LocationStream,
    LocationStreamConfig,
    create_default_stream,
)

__all__ = [
    'AnchorSink',
    'InMemoryAnchorSink',
    'LocationStream',
    'LocationStreamConfig',
    'create_default_stream',
]
