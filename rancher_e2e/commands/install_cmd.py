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

"""Install subcommands (monitoring)."""

from __future__ import annotations

import typer

from rancher_e2e.charts import InstallOptions
from rancher_e2e.clients import RancherClient
from rancher_e2e.monitoring import RancherMonitoringOpts, install_rancher_monitoring_chart
from rancher_e2e.session import Session

app = typer.Typer(help="Install charts.")


@app.command()
def monitoring(
    cluster_id: str = typer.Option(..., "--cluster-id", help="Rancher cluster ID"),
    cluster_name: str = typer.Option(..., "--cluster-name", help="Cluster display name"),
    version: str = typer.Option(..., "--version", help="rancher-monitoring chart version"),
    project_id: str = typer.Option("", "--project-id", help="Project for the chart namespace"),
    ingress_nginx: bool = typer.Option(False, "--ingress-nginx", help="Monitor ingress-nginx"),
    rke_controller_manager: bool = typer.Option(
        False, "--rke-controller-manager", help="Monitor the RKE controller manager"),
    rke_etcd: bool = typer.Option(False, "--rke-etcd", help="Monitor RKE etcd"),
    rke_proxy: bool = typer.Option(False, "--rke-proxy", help="Monitor the RKE proxy"),
    rke_scheduler: bool = typer.Option(False, "--rke-scheduler", help="Monitor the RKE scheduler"),
    cleanup: bool = typer.Option(False, "--cleanup", help="Uninstall again before exiting"),
) -> None:
    """Install rancher-monitoring and wait for it to be deployed."""
    session = Session()
    client = RancherClient.from_config(session)
    try:
        install_rancher_monitoring_chart(
            client,
            InstallOptions(
                cluster_name=cluster_name,
                cluster_id=cluster_id,
                version=version,
                project_id=project_id,
            ),
            RancherMonitoringOpts(
                ingress_nginx=ingress_nginx,
                rke_controller_manager=rke_controller_manager,
                rke_etcd=rke_etcd,
                rke_proxy=rke_proxy,
                rke_scheduler=rke_scheduler,
            ),
        )
    finally:
        if cleanup:
            session.cleanup()
