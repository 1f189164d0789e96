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

"""Rancher API clients: management, catalog, and downstream Kubernetes access."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests
from kubernetes import client as k8s_client

from rancher_e2e import logger
from rancher_e2e.config import RancherConfig
from rancher_e2e.constants import (
    CATALOG_APPS_PLURAL,
    CATALOG_GROUP,
    CATALOG_VERSION,
    CLUSTER_PROXY_PATH,
    HTTP_TIMEOUT_SECONDS,
    MANAGEMENT_API_PATH,
    RANCHER_CHARTS_REPO,
    STEVE_API_PATH,
)
from rancher_e2e.session import Session
from rancher_e2e.wait import WatchStream, name_selector, open_watch

if TYPE_CHECKING:
    from rancher_e2e.charts import ChartInstallAction, ChartUninstallAction


def _check(resp: requests.Response) -> dict[str, Any]:
    """Raise for HTTP errors and return the decoded JSON body, if any."""
    resp.raise_for_status()
    if not resp.content:
        return {}
    return resp.json()


class ManagementClient:
    """Client for the Rancher management (``/v3``) API."""

    def __init__(self, http: requests.Session, base_url: str) -> None:
        self._http = http
        self._base_url = base_url

    def create_cluster(self, cluster: dict[str, Any]) -> dict[str, Any]:
        """Create a management cluster object.

        Args:
            cluster: Cluster resource body.

        Returns:
            The created cluster as returned by the API.
        """
        logger.info("Creating cluster %s", cluster.get("name"))
        resp = self._http.post(f"{self._base_url}/clusters", json=cluster, timeout=HTTP_TIMEOUT_SECONDS)
        return _check(resp)

    def delete_cluster(self, cluster_id: str) -> None:
        """Delete a management cluster object by ID."""
        logger.info("Deleting cluster %s", cluster_id)
        resp = self._http.delete(f"{self._base_url}/clusters/{cluster_id}", timeout=HTTP_TIMEOUT_SECONDS)
        _check(resp)


class CatalogClient:
    """Chart install/uninstall actions and App watches for one downstream cluster."""

    def __init__(self, http: requests.Session, cluster_url: str, api_client: k8s_client.ApiClient) -> None:
        self._http = http
        self._cluster_url = cluster_url
        self._custom_objects = k8s_client.CustomObjectsApi(api_client)

    def install_chart(self, action: ChartInstallAction, repo: str = RANCHER_CHARTS_REPO) -> dict[str, Any]:
        """Submit a chart install action to a cluster repo.

        Args:
            action: Install action payload.
            repo: Name of the ClusterRepo holding the charts.

        Returns:
            The API response (the created operation).
        """
        url = f"{self._cluster_url}{STEVE_API_PATH}/{CATALOG_GROUP}.clusterrepos/{repo}"
        resp = self._http.post(
            url, params={"action": "install"}, json=action.to_payload(), timeout=HTTP_TIMEOUT_SECONDS,
        )
        return _check(resp)

    def uninstall_chart(self, name: str, namespace: str, action: ChartUninstallAction) -> dict[str, Any]:
        """Submit an uninstall action for an installed App.

        Args:
            name: App (release) name.
            namespace: App namespace.
            action: Uninstall action payload.

        Returns:
            The API response (the created operation).
        """
        url = f"{self._cluster_url}{STEVE_API_PATH}/{CATALOG_GROUP}.apps/{namespace}/{name}"
        resp = self._http.post(
            url, params={"action": "uninstall"}, json=action.to_payload(), timeout=HTTP_TIMEOUT_SECONDS,
        )
        return _check(resp)

    def watch_apps(self, namespace: str, name: str, timeout_seconds: int) -> WatchStream:
        """Watch a single catalog App by name."""
        return open_watch(
            self._custom_objects.list_namespaced_custom_object,
            CATALOG_GROUP, CATALOG_VERSION, namespace, CATALOG_APPS_PLURAL,
            timeout_seconds=timeout_seconds,
            field_selector=name_selector(name),
        )


class RancherClient:
    """Authenticated access to a Rancher server for one test session.

    Attributes:
        rancher_config: Server configuration.
        session: Cleanup registry shared by every helper using this client.
        management: Management API client.
    """

    def __init__(self, bearer_token: str, rancher_config: RancherConfig, session: Session) -> None:
        self.rancher_config = rancher_config
        self.session = session
        self._bearer_token = bearer_token
        self._http = requests.Session()
        self._http.headers["Authorization"] = f"Bearer {bearer_token}"
        self._http.verify = not rancher_config.insecure
        self.management = ManagementClient(self._http, f"{rancher_config.url}{MANAGEMENT_API_PATH}")
        self._api_clients: dict[str, k8s_client.ApiClient] = {}
        self._admin: RancherClient | None = None

    @classmethod
    def from_config(cls, session: Session, rancher_config: RancherConfig | None = None) -> RancherClient:
        """Build an admin client from the resolved Rancher configuration."""
        rancher_config = rancher_config or RancherConfig()
        return cls(rancher_config.admin_token, rancher_config, session)

    def as_admin(self) -> RancherClient:
        """Return a client authenticated with the admin token on the same session.

        The admin client is created once and closed with this one.
        """
        if self._bearer_token == self.rancher_config.admin_token:
            return self
        if self._admin is None:
            self._admin = RancherClient(self.rancher_config.admin_token, self.rancher_config, self.session)
        return self._admin

    def close(self) -> None:
        """Close the downstream API clients, the admin client and the HTTP session."""
        for api_client in self._api_clients.values():
            api_client.close()
        self._api_clients.clear()
        if self._admin is not None:
            self._admin.close()
            self._admin = None
        self._http.close()

    def cluster_url(self, cluster_id: str) -> str:
        """URL of the Rancher proxy for a downstream cluster."""
        return f"{self.rancher_config.url}{CLUSTER_PROXY_PATH}/{cluster_id}"

    def get_downstream_cluster_client(self, cluster_id: str) -> k8s_client.ApiClient:
        """Return the Kubernetes API client for a downstream cluster.

        One client is built per cluster and reused until :meth:`close`.

        Args:
            cluster_id: Rancher cluster ID (e.g. ``c-m-abcd1234`` or ``local``).

        Returns:
            An ApiClient talking to the cluster through the Rancher proxy.
        """
        if cluster_id in self._api_clients:
            return self._api_clients[cluster_id]
        configuration = k8s_client.Configuration()
        configuration.host = self.cluster_url(cluster_id)
        configuration.api_key["authorization"] = self._bearer_token
        configuration.api_key_prefix["authorization"] = "Bearer"
        configuration.verify_ssl = not self.rancher_config.insecure
        api_client = k8s_client.ApiClient(configuration)
        self._api_clients[cluster_id] = api_client
        return api_client

    def get_cluster_catalog_client(self, cluster_id: str) -> CatalogClient:
        """Build the catalog client for a downstream cluster."""
        return CatalogClient(
            self._http, self.cluster_url(cluster_id), self.get_downstream_cluster_client(cluster_id),
        )
