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

"""Delete subcommands (gke-cluster)."""

from __future__ import annotations

import typer

from rancher_e2e import console
from rancher_e2e.clients import RancherClient
from rancher_e2e.session import Session
from rancher_e2e.utils import ignore_not_found

app = typer.Typer(help="Delete clusters.")


@app.command("gke-cluster")
def gke_cluster(
    cluster_id: str = typer.Option(..., "--cluster-id", help="Rancher cluster ID"),
) -> None:
    """Delete a hosted cluster. A cluster that no longer exists counts as deleted."""
    client = RancherClient.from_config(Session())
    _, found = ignore_not_found(lambda: client.management.delete_cluster(cluster_id))
    if found:
        console.print(f"[green]\u2705 Cluster {cluster_id} deletion requested[/green]")
    else:
        console.print(f"[yellow]Cluster {cluster_id} not found[/yellow]")
