from typing import Callable, List, Optional


class MatchmakingQueue:
    """FIFO list of handles waiting for an opponent.

    A handle is queued at most once. Callers serialize access; the queue
    itself holds no lock.
    """

    def __init__(self):
        self._waiting: List[str] = []

    def request_match(self, handle: str, is_connected: Callable[[str], bool]) -> Optional[str]:
        """Pair ``handle`` with the longest-waiting player, or queue it.

        Returns the opponent handle when a pairing is made. Otherwise
        ``handle`` ends up at the tail of the queue and None is returned.
        A head entry whose connection is gone is discarded, and no second
        opponent is tried in the same call.
        """
        self.remove_if_queued(handle)

        if self._waiting:
            opponent = self._waiting.pop(0)
            if is_connected(opponent):
                return opponent

        self._waiting.append(handle)
        return None

    def remove_if_queued(self, handle: str) -> bool:
        if handle in self._waiting:
            self._waiting.remove(handle)
            return True
        return False

    def snapshot(self) -> List[str]:
        return list(self._waiting)

    def __contains__(self, handle):
        return handle in self._waiting

    def __len__(self):
        return len(self._waiting)
