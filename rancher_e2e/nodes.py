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

"""Node descriptions for bring-your-own-node clusters."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from rancher_e2e.constants import SSH_DIR


class Node(BaseModel):
    """A machine reachable over SSH.

    Attributes:
        node_id: Provider-specific identifier (e.g. EC2 instance ID).
        public_ip_address: Address used to reach the node.
        private_ip_address: Address inside the node's network.
        ssh_user: Login user.
        ssh_key_name: File name of the private key under ``~/.ssh``.
        ssh_key: Private key contents, attached by the node provider.
    """

    model_config = ConfigDict(populate_by_name=True)

    node_id: str = Field(default="", alias="nodeID")
    public_ip_address: str = Field(default="", alias="publicIPAddress")
    private_ip_address: str = Field(default="", alias="privateIPAddress")
    ssh_user: str = Field(default="", alias="sshUser")
    ssh_key_name: str = Field(default="", alias="sshKeyName")
    ssh_key: str = Field(default="", alias="sshKey", repr=False)


class ExternalNodeConfig(BaseModel):
    """Static node inventory, keyed by the number of nodes a test asks for."""

    nodes: dict[int, list[Node]] = Field(default_factory=dict)


def get_ssh_key(ssh_key_name: str) -> str:
    """Read a private key from the user's ``~/.ssh`` directory.

    Args:
        ssh_key_name: File name of the key.

    Returns:
        The key contents.

    Raises:
        OSError: If the key file cannot be read.
    """
    return (Path.home() / SSH_DIR / ssh_key_name).read_text()
