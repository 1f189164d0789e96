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

"""Constants, defaults loading, and default_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_defaults() -> dict:
    """Load default values from defaults.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    defaults_file = Path(__file__).resolve().parent / "defaults.yaml"
    with open(defaults_file) as f:
        return yaml.safe_load(f)


DEFAULTS = load_defaults()


def default_value(*keys: str, default: Any = None) -> Any:
    """Safely traverse the DEFAULTS dict by key path.

    Args:
        *keys: Sequence of dictionary keys to traverse.
        default: Value to return if any key is missing.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEFAULTS
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


DEFAULT_WATCH_TIMEOUT_SECONDS = default_value("watch", "timeout_seconds", default=300)
DEFAULT_DOCKER_ROOT_DIR = default_value("cluster", "docker_root_dir", default="/var/lib/docker")

# -- Config file --
CONFIG_FILE_ENV = "CATTLE_TEST_CONFIG"
RANCHER_CONFIG_KEY = "rancher"
EXTERNAL_NODE_CONFIG_KEY = "externalNodes"
AWS_EC2_CONFIG_KEY = "awsEC2Config"
GKE_CLUSTER_CONFIG_KEY = "gkeClusterConfig"

# -- rancher-monitoring --
RANCHER_MONITORING_NAMESPACE = "cattle-monitoring-system"
RANCHER_MONITORING_NAME = "rancher-monitoring"
CRD_CHART_SUFFIX = "-crd"

# -- Catalog --
RANCHER_CHARTS_REPO = "rancher-charts"
CATALOG_GROUP = "catalog.cattle.io"
CATALOG_VERSION = "v1"
CATALOG_APPS_PLURAL = "apps"
APP_STATE_DEPLOYED = "deployed"
APP_STATE_FAILED = "failed"
ANNOTATION_UI_SOURCE_REPO = "catalog.cattle.io/ui-source-repo"
ANNOTATION_UI_SOURCE_REPO_TYPE = "catalog.cattle.io/ui-source-repo-type"
CHART_INSTALL_TIMEOUT = "600s"

# -- API paths --
HTTP_TIMEOUT_SECONDS = 60
CLUSTER_PROXY_PATH = "/k8s/clusters"
MANAGEMENT_API_PATH = "/v3"
STEVE_API_PATH = "/v1"

# -- Node providers --
EC2_NODE_PROVIDER_NAME = "ec2"
FROM_CONFIG_NODE_PROVIDER_NAME = "config"
SSH_DIR = ".ssh"

# -- EC2 --
EC2_PUBLIC_IP_MAX_RETRIES = 30
EC2_PUBLIC_IP_POLL_INTERVAL_SECONDS = 5
EC2_DEFAULT_VOLUME_SIZE = 50
EC2_DEFAULT_USER = "ubuntu"
EC2_INSTANCE_TAG_KEY = "Name"
EC2_NOT_FOUND_CODES = ("InvalidInstanceID.NotFound",)
