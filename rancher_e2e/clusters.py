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

"""Hosted GKE cluster provisioning through the Rancher management API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rancher_e2e import console
from rancher_e2e.clients import RancherClient
from rancher_e2e.config import load_config
from rancher_e2e.constants import DEFAULT_DOCKER_ROOT_DIR, GKE_CLUSTER_CONFIG_KEY


class _GKEModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class GKENodePoolAutoscaling(_GKEModel):
    enabled: bool = False
    max_node_count: int = 0
    min_node_count: int = 0


class GKENodeConfig(_GKEModel):
    disk_size_gb: int = 100
    disk_type: str = "pd-standard"
    image_type: str = "COS_CONTAINERD"
    labels: dict[str, str] = Field(default_factory=dict)
    local_ssd_count: int = 0
    machine_type: str = "n1-standard-2"
    oauth_scopes: list[str] = Field(default_factory=list)
    preemptible: bool = False
    taints: list[dict[str, str]] = Field(default_factory=list)


class GKENodePoolManagement(_GKEModel):
    auto_repair: bool = True
    auto_upgrade: bool = True


class GKENodePool(_GKEModel):
    autoscaling: GKENodePoolAutoscaling = Field(default_factory=GKENodePoolAutoscaling)
    config: GKENodeConfig = Field(default_factory=GKENodeConfig)
    initial_node_count: int = 3
    management: GKENodePoolManagement = Field(default_factory=GKENodePoolManagement)
    max_pods_constraint: int = 110
    name: str = "pool-1"
    version: str = ""


class GKEClusterConfig(_GKEModel):
    """GKE settings read from the ``gkeClusterConfig`` config file section.

    Unknown keys are passed through to the cluster spec unchanged.
    """

    cluster_addons: dict[str, Any] = Field(default_factory=dict)
    cluster_ipv4_cidr_block: str | None = None
    enable_kubernetes_alpha: bool = False
    ip_allocation_policy: dict[str, Any] = Field(default_factory=dict)
    kubernetes_version: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    locations: list[str] = Field(default_factory=list)
    logging_service: str = "logging.googleapis.com/kubernetes"
    maintenance_window: str = ""
    master_authorized_networks: dict[str, Any] = Field(default_factory=dict)
    monitoring_service: str = "monitoring.googleapis.com/kubernetes"
    network: str = "default"
    network_policy_enabled: bool = False
    node_pools: list[GKENodePool] = Field(default_factory=lambda: [GKENodePool()])
    private_cluster_config: dict[str, Any] = Field(default_factory=dict)
    project_id: str = Field(default="", alias="projectID")
    region: str = ""
    subnetwork: str = "default"
    zone: str = ""


def gke_host_cluster_config(display_name: str, cloud_credential_id: str) -> dict[str, Any]:
    """Build the ``gkeConfig`` spec from the config file.

    Args:
        display_name: Name of the GKE cluster.
        cloud_credential_id: Rancher cloud credential holding the Google service account.

    Returns:
        The gkeConfig body as a camelCase dictionary.
    """
    gke_config = load_config(GKE_CLUSTER_CONFIG_KEY, GKEClusterConfig)
    spec = gke_config.model_dump(by_alias=True, exclude_none=True)
    spec.update({
        "clusterName": display_name,
        "googleCredentialSecret": cloud_credential_id,
        "imported": False,
    })
    return spec


def create_gke_hosted_cluster(
    client: RancherClient,
    display_name: str,
    cloud_credential_id: str,
    enable_cluster_alerting: bool,
    enable_cluster_monitoring: bool,
    enable_network_policy: bool,
    windows_prefered_cluster: bool,
    labels: dict[str, str],
) -> dict[str, Any]:
    """Create a hosted GKE cluster.

    The request is submitted and the management API response returned as is;
    the cluster is not waited on.

    Args:
        client: Rancher client.
        display_name: Cluster name.
        cloud_credential_id: Rancher cloud credential ID.
        enable_cluster_alerting: Legacy cluster alerting flag.
        enable_cluster_monitoring: Legacy cluster monitoring flag.
        enable_network_policy: Enable project network isolation.
        windows_prefered_cluster: Prefer Windows workloads.
        labels: Labels on the Rancher cluster object.

    Returns:
        The created cluster object.
    """
    cluster = {
        "type": "cluster",
        "dockerRootDir": DEFAULT_DOCKER_ROOT_DIR,
        "gkeConfig": gke_host_cluster_config(display_name, cloud_credential_id),
        "name": display_name,
        "enableClusterAlerting": enable_cluster_alerting,
        "enableClusterMonitoring": enable_cluster_monitoring,
        "enableNetworkPolicy": enable_network_policy,
        "labels": labels,
        "windowsPreferedCluster": windows_prefered_cluster,
    }
    console.print(f"[yellow]\u2139\ufe0f  Creating GKE cluster {display_name}...[/yellow]")
    return client.management.create_cluster(cluster)
