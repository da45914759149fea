import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    """
    A value computed on first access and shared afterwards.
    Concurrent first callers block on the lock; the factory runs exactly once.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._ready = False
        self._value: T | None = None

    def get(self) -> T:
        if not self._ready:
            with self._lock:
                if not self._ready:
                    self._value = self._factory()
                    self._ready = True
        return self._value  # type: ignore[return-value]

    @property
    def is_initialized(self) -> bool:
        return self._ready
