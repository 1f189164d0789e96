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

"""rancher-monitoring chart install and uninstall."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from kubernetes import client as k8s_client
from rich.panel import Panel

from rancher_e2e import console, logger
from rancher_e2e.charts import (
    ChartInstallAction,
    InstallOptions,
    PayloadOpts,
    new_chart_install,
    new_chart_install_action,
    new_chart_uninstall_action,
)
from rancher_e2e.clients import RancherClient
from rancher_e2e.constants import (
    APP_STATE_DEPLOYED,
    APP_STATE_FAILED,
    CRD_CHART_SUFFIX,
    RANCHER_MONITORING_NAME,
    RANCHER_MONITORING_NAMESPACE,
    default_value,
)
from rancher_e2e.utils import ignore_not_found
from rancher_e2e.wait import (
    OperationFailedError,
    WatchEvent,
    deleted,
    fail_on_error,
    name_selector,
    open_watch,
    watch_wait,
)


@dataclass(frozen=True)
class RancherMonitoringOpts:
    """Per-component toggles of the rancher-monitoring chart."""

    ingress_nginx: bool = False
    rke_controller_manager: bool = False
    rke_etcd: bool = False
    rke_proxy: bool = False
    rke_scheduler: bool = False


def new_monitoring_chart_install_action(payload: PayloadOpts, opts: RancherMonitoringOpts) -> ChartInstallAction:
    """Build the install action for the CRD chart followed by the main chart.

    Args:
        payload: Install options with chart name, namespace and host.
        opts: Component toggles.

    Returns:
        Install action holding both charts.
    """
    monitoring_values: dict[str, Any] = {
        "ingressNginx": {"enabled": opts.ingress_nginx},
        "prometheus": {
            "prometheusSpec": dict(default_value("charts", "rancher_monitoring", "prometheus_spec", default={})),
        },
        "rkeControllerManager": {"enabled": opts.rke_controller_manager},
        "rkeEtcd": {"enabled": opts.rke_etcd},
        "rkeProxy": {"enabled": opts.rke_proxy},
        "rkeScheduler": {"enabled": opts.rke_scheduler},
    }
    install = payload.install_options
    url = f"https://{payload.host}"
    chart = new_chart_install(
        payload.name, install.version, install.cluster_id, install.cluster_name, url, monitoring_values,
    )
    crd_chart = new_chart_install(
        payload.name + CRD_CHART_SUFFIX, install.version, install.cluster_id, install.cluster_name, url, None,
    )
    return new_chart_install_action(payload.namespace, install.project_id, [crd_chart, chart])


def _app_deployed(event: WatchEvent) -> bool:
    """Done once the App reports the deployed state."""
    status = (event.object or {}).get("status") or {}
    state = (status.get("summary") or {}).get("state")
    if state == APP_STATE_FAILED:
        raise OperationFailedError(f"{RANCHER_MONITORING_NAME} chart failed to deploy")
    return state == APP_STATE_DEPLOYED


def uninstall_rancher_monitoring_chart(client: RancherClient, cluster_id: str) -> None:
    """Uninstall rancher-monitoring and delete its namespace, waiting for both.

    Already-absent resources count as removed.

    Args:
        client: Rancher client.
        cluster_id: Rancher ID of the cluster the chart lives in.

    Raises:
        OperationFailedError: If the uninstall reports an error event.
        WatchClosedError: If a deletion is not observed before the watch times out.
    """
    timeout = client.rancher_config.watch_timeout_seconds
    catalog_client = client.get_cluster_catalog_client(cluster_id)

    console.print(f"[yellow]\u2139\ufe0f  Uninstalling {RANCHER_MONITORING_NAME}...[/yellow]")
    _, found = ignore_not_found(lambda: catalog_client.uninstall_chart(
        RANCHER_MONITORING_NAME, RANCHER_MONITORING_NAMESPACE, new_chart_uninstall_action(),
    ))
    if found:
        watch_wait(
            catalog_client.watch_apps(RANCHER_MONITORING_NAMESPACE, RANCHER_MONITORING_NAME, timeout),
            fail_on_error("there was an error uninstalling rancher monitoring chart", deleted),
        )

    core_v1 = k8s_client.CoreV1Api(client.get_downstream_cluster_client(cluster_id))
    _, found = ignore_not_found(lambda: core_v1.delete_namespace(RANCHER_MONITORING_NAMESPACE))
    if not found:
        logger.info("Namespace %s already deleted", RANCHER_MONITORING_NAMESPACE)
        return

    # The namespace watch needs admin rights: the user's access may go with the namespace.
    admin_core_v1 = k8s_client.CoreV1Api(client.as_admin().get_downstream_cluster_client(cluster_id))
    watch_wait(
        open_watch(
            admin_core_v1.list_namespace,
            timeout_seconds=timeout,
            field_selector=name_selector(RANCHER_MONITORING_NAMESPACE),
        ),
        deleted,
    )
    console.print(f"[green]\u2705 {RANCHER_MONITORING_NAME} uninstalled[/green]")


def install_rancher_monitoring_chart(
    client: RancherClient,
    install_options: InstallOptions,
    opts: RancherMonitoringOpts,
) -> None:
    """Install rancher-monitoring and wait for the App to be deployed.

    The uninstall is registered on the client session before the install
    request is sent, so a partially installed chart is still cleaned up.

    Args:
        client: Rancher client whose session receives the cleanup.
        install_options: Target cluster and chart version.
        opts: Component toggles.

    Raises:
        OperationFailedError: If the App fails to deploy.
        WatchClosedError: If the App is not deployed before the watch times out.
    """
    console.print(Panel.fit(f"Installing {RANCHER_MONITORING_NAME} {install_options.version}", style="bold blue"))
    payload = PayloadOpts(
        install_options=install_options,
        name=RANCHER_MONITORING_NAME,
        namespace=RANCHER_MONITORING_NAMESPACE,
        host=client.rancher_config.host,
    )
    action = new_monitoring_chart_install_action(payload, opts)
    catalog_client = client.get_cluster_catalog_client(install_options.cluster_id)

    client.session.register_cleanup(
        lambda: uninstall_rancher_monitoring_chart(client, install_options.cluster_id),
    )

    catalog_client.install_chart(action)

    console.print("[yellow]\u2139\ufe0f  Waiting for the chart to be deployed...[/yellow]")
    watch_wait(
        catalog_client.watch_apps(
            RANCHER_MONITORING_NAMESPACE, RANCHER_MONITORING_NAME, client.rancher_config.watch_timeout_seconds,
        ),
        fail_on_error(f"there was an error installing {RANCHER_MONITORING_NAME} chart", _app_deployed),
    )
    console.print(f"[green]\u2705 {RANCHER_MONITORING_NAME} deployed[/green]")
