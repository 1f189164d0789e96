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

"""Uninstall subcommands (monitoring)."""

from __future__ import annotations

import typer

from rancher_e2e.clients import RancherClient
from rancher_e2e.monitoring import uninstall_rancher_monitoring_chart
from rancher_e2e.session import Session

app = typer.Typer(help="Uninstall charts.")


@app.command()
def monitoring(
    cluster_id: str = typer.Option(..., "--cluster-id", help="Rancher cluster ID"),
) -> None:
    """Uninstall rancher-monitoring and delete its namespace."""
    client = RancherClient.from_config(Session())
    uninstall_rancher_monitoring_chart(client, cluster_id)
