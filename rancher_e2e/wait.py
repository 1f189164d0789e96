# /*
# Copyright 2026 The Rancher E2E Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Condition waits over Kubernetes watch streams.

A wait consumes a watch stream event by event and hands each event to a
caller-supplied predicate. The predicate decides when the watched resource
has reached the state the caller is after:

* returning ``True`` ends the wait successfully;
* returning ``False`` keeps consuming;
* raising ends the wait and propagates the exception unchanged.

The stream is closed on every exit path. The wait itself never retries and
never applies its own deadline: the timeout travels with the watch request
(``timeout_seconds``) and shows up here as the stream running dry, which is
reported as :class:`WatchClosedError`.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from kubernetes import watch
from kubernetes.client.exceptions import ApiException

from rancher_e2e import logger


class WaitError(Exception):
    """Base class for condition wait failures."""


class WatchClosedError(WaitError):
    """The watch stream ended before the condition was met."""


class OperationFailedError(WaitError):
    """A predicate observed that the watched operation failed."""


class EventType(str, enum.Enum):
    """Kubernetes watch event types."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    ERROR = "ERROR"
    BOOKMARK = "BOOKMARK"


@dataclass(frozen=True)
class WatchEvent:
    """A single change notification.

    Attributes:
        type: Kind of change.
        object: Resource snapshot. A dict for custom resources, a client
            model (e.g. ``V1Namespace``) for typed resources.
        raw_object: Undecoded JSON of the resource, when available.
    """

    type: EventType
    object: Any
    raw_object: dict | None = None

    @classmethod
    def from_raw(cls, event: dict) -> WatchEvent:
        """Build an event from a ``kubernetes.watch.Watch`` stream item."""
        return cls(
            type=EventType(event["type"]),
            object=event.get("object"),
            raw_object=event.get("raw_object"),
        )


Predicate = Callable[[WatchEvent], bool]


class WatchStream:
    """An open watch subscription yielding :class:`WatchEvent` objects.

    ``kubernetes.watch.Watch`` raises ERROR events as :class:`ApiException`
    instead of yielding them. They are turned back into a final ``ERROR``
    event here, so predicates see them like any other event.
    """

    def __init__(self, list_func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._watch = watch.Watch()
        self._events = self._watch.stream(list_func, *args, **kwargs)
        self._done = False

    def __iter__(self) -> Iterator[WatchEvent]:
        return self

    def __next__(self) -> WatchEvent:
        if self._done:
            raise StopIteration
        try:
            return WatchEvent.from_raw(next(self._events))
        except ApiException as err:
            if not _is_error_event(err):
                raise
            self._done = True
            return WatchEvent(type=EventType.ERROR, object={"code": err.status, "reason": err.reason})

    def close(self) -> None:
        """Stop the watch and release the underlying HTTP response."""
        self._watch.stop()
        self._events.close()


def _is_error_event(err: ApiException) -> bool:
    """Report whether *err* was raised by the watch for an ERROR event.

    Request failures carry the HTTP response headers, connection failures
    have status 0. An ERROR event has neither.
    """
    return err.headers is None and bool(err.status)


def name_selector(name: str) -> str:
    """Field selector matching a single object by name."""
    return f"metadata.name={name}"


def open_watch(
    list_func: Callable[..., Any],
    *args: Any,
    timeout_seconds: int,
    field_selector: str | None = None,
    **kwargs: Any,
) -> WatchStream:
    """Open a watch on a Kubernetes list function.

    Args:
        list_func: Client list method, e.g. ``CoreV1Api.list_namespace``.
        *args: Positional arguments for *list_func*.
        timeout_seconds: Server-side timeout of the watch request.
        field_selector: Optional field selector, see :func:`name_selector`.
        **kwargs: Extra keyword arguments for *list_func*.

    Returns:
        The open stream. The caller owns it; :func:`watch_wait` closes it.
    """
    if field_selector is not None:
        kwargs["field_selector"] = field_selector
    return WatchStream(list_func, *args, timeout_seconds=timeout_seconds, **kwargs)


def watch_wait(stream: Iterable[WatchEvent], predicate: Predicate) -> None:
    """Block until *predicate* accepts an event from *stream*.

    Args:
        stream: Open event stream. Closed on return if it has ``close()``.
        predicate: Called once per event in arrival order.

    Raises:
        WatchClosedError: If the stream ends before the predicate returns True.
        Exception: Whatever the predicate or the stream raises, unchanged.
    """
    try:
        for event in stream:
            if predicate(event):
                return
    finally:
        close = getattr(stream, "close", None)
        if close is not None:
            close()
    raise WatchClosedError("watch closed before condition was met")


# ============================================================================
# Predicates
# ============================================================================

def deleted(event: WatchEvent) -> bool:
    """Done once the watched object is deleted."""
    return event.type is EventType.DELETED


def fail_on_error(message: str, predicate: Predicate) -> Predicate:
    """Wrap *predicate* so that an ``ERROR`` event fails the wait.

    Args:
        message: Message of the raised :class:`OperationFailedError`.
        predicate: Predicate consulted for every other event.

    Returns:
        The wrapping predicate.
    """
    def check(event: WatchEvent) -> bool:
        if event.type is EventType.ERROR:
            logger.debug("Watch error event: %s", event.object)
            raise OperationFailedError(message)
        return predicate(event)

    return check
