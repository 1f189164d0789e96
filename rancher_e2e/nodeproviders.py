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

"""External node provider selection for custom cluster tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from rancher_e2e import ec2, logger
from rancher_e2e.clients import RancherClient
from rancher_e2e.config import ConfigError, load_config
from rancher_e2e.constants import (
    EC2_NODE_PROVIDER_NAME,
    EXTERNAL_NODE_CONFIG_KEY,
    FROM_CONFIG_NODE_PROVIDER_NAME,
)
from rancher_e2e.nodes import ExternalNodeConfig, Node, get_ssh_key

NodeCreationFunc = Callable[[RancherClient, int], list[Node]]


class NodeProviderNotFoundError(ValueError):
    """Raised when an unknown external node provider is requested."""


@dataclass(frozen=True)
class ExternalNodeProvider:
    """A named source of nodes for custom clusters.

    Attributes:
        name: Provider name.
        node_creation_func: Returns the requested number of nodes.
    """

    name: str
    node_creation_func: NodeCreationFunc


def nodes_from_config(client: RancherClient, num_of_instances: int) -> list[Node]:
    """Return the configured static nodes for *num_of_instances*, with SSH keys.

    Args:
        client: Rancher client (unused; keeps the node creation signature).
        num_of_instances: Number of nodes requested, the inventory key.

    Returns:
        The configured nodes, each with ``ssh_key`` loaded.

    Raises:
        ConfigError: If the inventory has no entry for *num_of_instances*.
    """
    node_config = load_config(EXTERNAL_NODE_CONFIG_KEY, ExternalNodeConfig)
    nodes = node_config.nodes.get(num_of_instances)
    if nodes is None:
        raise ConfigError(f"No external nodes configured for {num_of_instances} instance(s)")
    for node in nodes:
        node.ssh_key = get_ssh_key(node.ssh_key_name)
    logger.info("Using %d nodes from config", len(nodes))
    return nodes


_NODE_CREATION_FUNCS: dict[str, NodeCreationFunc] = {
    EC2_NODE_PROVIDER_NAME: ec2.create_nodes,
    FROM_CONFIG_NODE_PROVIDER_NAME: nodes_from_config,
}


def external_node_provider_setup(provider_type: str) -> ExternalNodeProvider:
    """Select the external node provider by name.

    Args:
        provider_type: ``ec2`` or ``config``.

    Returns:
        The provider wrapping its node creation function.

    Raises:
        NodeProviderNotFoundError: If *provider_type* is not a known provider.
    """
    try:
        func = _NODE_CREATION_FUNCS[provider_type]
    except KeyError:
        raise NodeProviderNotFoundError(f"Node Provider:{provider_type} not found") from None
    return ExternalNodeProvider(name=provider_type, node_creation_func=func)
