from typing import Callable, Generic, Optional, TypeVar, cast

from typing_extensions import Self

T = TypeVar("T")
E = TypeVar("E")


class Either(Generic[T, E]):
    """Mostly for lazy gathering of errors during validation. Looks fancier than actually is"""

    def __init__(self, t: Optional[T] = None, e: Optional[E] = None):
        self.t = t
        self.e = e

    @classmethod
    def ok(cls, t: T) -> Self:
        return cls(t=t)

    @classmethod
    def error(cls, e: E) -> Self:
        return cls(e=e)

    def is_ok(self) -> bool:
        return not self.e

    def get_or_raise(self, raiser: Optional[Callable[[E], BaseException]] = None) -> T:
        if self.e:
            if not raiser:
                raise ValueError(self.e)
            else:
                raise raiser(self.e)
        else:
            return cast(T, self.t)

