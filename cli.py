#!/usr/bin/env python3
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

"""
cli.py - CLI for the Rancher e2e helpers.

Subcommands:
    create     Create resources (gke-cluster, nodes)
    delete     Delete resources (gke-cluster)
    install    Install charts (monitoring)
    uninstall  Uninstall charts (monitoring)

Configuration comes from RANCHER_* environment variables and the YAML file
named by CATTLE_TEST_CONFIG.

Examples:
    # Install rancher-monitoring on a downstream cluster
    ./cli.py install monitoring --cluster-id c-m-abc123 --cluster-name test --version 102.0.0

    # Install, then uninstall again (smoke test of both paths)
    ./cli.py install monitoring --cluster-id c-m-abc123 --cluster-name test --version 102.0.0 --cleanup

    # Create a hosted GKE cluster
    ./cli.py create gke-cluster --name gke-e2e --cloud-credential cattle-global-data:cc-xyz

    # Look up three static nodes from the config file
    ./cli.py create nodes --provider config --count 3

For detailed usage information, run: ./cli.py --help
"""

from __future__ import annotations

import logging
import sys

import typer

from rancher_e2e import console
from rancher_e2e.commands import (
    create_cmd,
    delete_cmd,
    install_cmd,
    uninstall_cmd,
)

app = typer.Typer(
    help="Rancher e2e helpers.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.add_typer(create_cmd.app, name="create")
app.add_typer(delete_cmd.app, name="delete")
app.add_typer(install_cmd.app, name="install")
app.add_typer(uninstall_cmd.app, name="uninstall")


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
