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

"""Per-session registry of deferred cleanup actions."""

from __future__ import annotations

import threading
from collections.abc import Callable

from rancher_e2e import console, logger

CleanupFunc = Callable[[], object]


class CleanupError(Exception):
    """One or more cleanup actions failed.

    Attributes:
        errors: Exceptions raised by the failed actions, in execution order.
    """

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = errors
        details = "; ".join(f"{type(err).__name__}: {err}" for err in errors)
        super().__init__(f"{len(errors)} cleanup action(s) failed: {details}")


class Session:
    """Ordered list of teardown actions owned by a test session.

    Actions run in reverse registration order so that resources are released
    in the opposite order they were acquired. A failing action is logged and
    does not stop the remaining ones.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cleanups: list[CleanupFunc] = []

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cleanups)

    def register_cleanup(self, action: CleanupFunc) -> None:
        """Register a zero-argument action to run at teardown.

        Args:
            action: Callable that releases a resource. Raising marks it failed.
        """
        with self._lock:
            self._cleanups.append(action)

    def new_session(self) -> Session:
        """Create a child session torn down as part of this one.

        Returns:
            A session whose cleanup is registered on this session.
        """
        child = Session()
        self.register_cleanup(child.cleanup)
        return child

    def _pop(self) -> CleanupFunc | None:
        with self._lock:
            if not self._cleanups:
                return None
            return self._cleanups.pop()

    def cleanup(self) -> None:
        """Run every registered action, last registered first.

        Actions registered while the drain is in progress run next.

        Raises:
            CleanupError: If at least one action raised.
        """
        errors: list[Exception] = []
        while (action := self._pop()) is not None:
            name = getattr(action, "__qualname__", repr(action))
            try:
                action()
            except Exception as err:
                logger.error("Cleanup %s failed: %s", name, err)
                console.print(f"[yellow]\u26a0\ufe0f  Cleanup {name} failed: {err}[/yellow]")
                if isinstance(err, CleanupError):
                    errors.extend(err.errors)
                else:
                    errors.append(err)
        if errors:
            raise CleanupError(errors)
