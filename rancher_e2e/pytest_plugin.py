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

"""pytest fixtures for e2e tests.

Enable with ``pytest_plugins = ["rancher_e2e.pytest_plugin"]`` in a conftest.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from rancher_e2e import logger
from rancher_e2e.clients import RancherClient
from rancher_e2e.config import RancherConfig
from rancher_e2e.session import Session


@pytest.fixture(scope="session")
def rancher_config() -> RancherConfig:
    """Rancher configuration resolved from env vars and the test config file."""
    return RancherConfig()


@pytest.fixture
def e2e_session(rancher_config: RancherConfig) -> Iterator[Session]:
    """Cleanup registry torn down after the test, unless cleanup is disabled."""
    session = Session()
    yield session
    if not rancher_config.cleanup:
        logger.warning("Cleanup disabled; leaving %d registered cleanup(s)", len(session))
        return
    session.cleanup()


@pytest.fixture
def rancher_client(rancher_config: RancherConfig, e2e_session: Session) -> RancherClient:
    """Admin client bound to the test's cleanup session.

    Closing the client is registered first so it runs after every other cleanup.
    """
    client = RancherClient(rancher_config.admin_token, rancher_config, e2e_session)
    e2e_session.register_cleanup(client.close)
    return client
