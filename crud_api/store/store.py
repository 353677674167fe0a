import copy
import logging
import threading
import typing as t

logger = logging.getLogger(__name__)

R = t.TypeVar("R")


class Store(t.Generic[R]):
    """
    Ordered in-memory sequence of records guarded by a single lock.
    Every operation holds the lock for its whole read-modify-write and hands out copies, so callers never
    observe a record while another request is changing it.
    Ids start at 1 and are never reused, even after a delete.
    """

    def __init__(self) -> None:
        self.__records: t.List[R] = []
        self.__next_id = 1
        self.__lock = threading.Lock()

    def insert(self, record: R) -> R:
        with self.__lock:
            record.id = self.__next_id
            self.__next_id += 1
            self.__records.append(copy.copy(record))
            return copy.copy(record)

    def fetch_all(self) -> t.List[R]:
        with self.__lock:
            return [copy.copy(record) for record in self.__records]

    def fetch_one(self, record_id: int) -> t.Optional[R]:
        with self.__lock:
            for record in self.__records:
                if record.id == record_id:
                    return copy.copy(record)
        return None

    def find(self, predicate: t.Callable[[R], bool]) -> t.Optional[R]:
        """
        Returns a copy of the first record, in insertion order, matching the predicate
        """
        with self.__lock:
            for record in self.__records:
                if predicate(record):
                    return copy.copy(record)
        return None

    def modify(self, record_id: int, apply: t.Callable[[R], None]) -> t.Optional[R]:
        """
        Applies `apply` to the stored record in place, under the lock.
        Returns a copy of the modified record, or None if no record has that id.
        """
        with self.__lock:
            for record in self.__records:
                if record.id == record_id:
                    apply(record)
                    return copy.copy(record)
        return None

    def remove(self, record_id: int) -> bool:
        with self.__lock:
            for index, record in enumerate(self.__records):
                if record.id == record_id:
                    del self.__records[index]
                    return True
        return False

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__records)
