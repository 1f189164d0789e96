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

"""Create subcommands (gke-cluster, nodes)."""

from __future__ import annotations

import typer
from rich.table import Table

from rancher_e2e import console
from rancher_e2e.clients import RancherClient
from rancher_e2e.clusters import create_gke_hosted_cluster
from rancher_e2e.constants import EC2_NODE_PROVIDER_NAME
from rancher_e2e.nodeproviders import external_node_provider_setup
from rancher_e2e.session import Session
from rancher_e2e.utils import parse_key_values

app = typer.Typer(help="Create clusters and nodes.")


@app.command("gke-cluster")
def gke_cluster(
    name: str = typer.Option(..., "--name", help="Cluster name"),
    cloud_credential: str = typer.Option(..., "--cloud-credential", help="Rancher cloud credential ID"),
    cluster_alerting: bool = typer.Option(False, "--cluster-alerting", help="Enable cluster alerting"),
    cluster_monitoring: bool = typer.Option(False, "--cluster-monitoring", help="Enable cluster monitoring"),
    network_policy: bool = typer.Option(False, "--network-policy", help="Enable project network isolation"),
    windows_preferred: bool = typer.Option(False, "--windows-preferred", help="Prefer Windows workloads"),
    label: list[str] = typer.Option([], "--label", help="Cluster label as key=value (repeatable)"),
) -> None:
    """Create a hosted GKE cluster from the gkeClusterConfig section."""
    try:
        labels = parse_key_values(label)
    except ValueError as err:
        raise typer.BadParameter(str(err), param_hint="--label") from err

    client = RancherClient.from_config(Session())
    cluster = create_gke_hosted_cluster(
        client, name, cloud_credential,
        cluster_alerting, cluster_monitoring, network_policy, windows_preferred,
        labels,
    )
    console.print(f"[green]\u2705 Cluster {cluster.get('name', name)} created (id: {cluster.get('id', '?')})[/green]")


@app.command()
def nodes(
    provider: str = typer.Option(EC2_NODE_PROVIDER_NAME, "--provider", help="Node provider: ec2 or config"),
    count: int = typer.Option(1, "--count", min=1, help="Number of nodes"),
    cleanup: bool = typer.Option(False, "--cleanup", help="Release the nodes again before exiting"),
) -> None:
    """Create (or look up) external nodes and print them."""
    node_provider = external_node_provider_setup(provider)
    session = Session()
    try:
        created = node_provider.node_creation_func(RancherClient.from_config(session), count)

        table = Table(title=f"Nodes ({node_provider.name})")
        for column in ("ID", "Public IP", "Private IP", "SSH user"):
            table.add_column(column)
        for node in created:
            table.add_row(node.node_id, node.public_ip_address, node.private_ip_address, node.ssh_user)
        console.print(table)
    finally:
        if cleanup:
            session.cleanup()
