from typing import Dict, Optional


class ConnectionRegistry:
    """Live outbound channels keyed by player handle."""

    def __init__(self):
        self._channels: Dict[str, object] = {}

    def register(self, handle: str, channel) -> None:
        self._channels[handle] = channel

    def unregister(self, handle: str) -> None:
        self._channels.pop(handle, None)

    def lookup(self, handle: str) -> Optional[object]:
        return self._channels.get(handle)

    def __contains__(self, handle):
        return handle in self._channels

    def __len__(self):
        return len(self._channels)
