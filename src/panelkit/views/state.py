"""View state for screens backed by one or more queries."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from panelkit.exceptions import PanelKitError

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of fetching one piece of data for a screen."""

    data: T | None = None
    error: str | None = None
    is_loading: bool = False

    @classmethod
    def loading(cls) -> QueryResult[T]:
        return cls(is_loading=True)

    @classmethod
    def failed(cls, error: str) -> QueryResult[T]:
        return cls(error=error)

    @classmethod
    def of(cls, data: T) -> QueryResult[T]:
        return cls(data=data)

    @classmethod
    def run(cls, fetch: Callable[[], T]) -> QueryResult[T]:
        """Call ``fetch`` and capture a PanelKit error as a failed result."""
        try:
            return cls(data=fetch())
        except PanelKitError as e:
            return cls(error=e.message)

    def data_or(self, default: Any) -> Any:
        return default if self.data is None else self.data


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class Ready:
    data: tuple[Any, ...] = ()


ViewState = Loading | Error | Ready


def combine_states(*results: QueryResult[Any], is_pending: bool = False) -> ViewState:
    """Merge query results into one view state.

    An error wins over loading, loading wins over ready. With several errors
    the first one in argument order is reported. ``is_pending`` forces the
    loading state, e.g. while the entity slug is not known yet.
    """
    for result in results:
        if result.error:
            return Error(result.error)
    if is_pending or any(result.is_loading for result in results):
        return Loading()
    return Ready(tuple(result.data for result in results))
