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

import pytest
import requests
from unittest.mock import ANY, MagicMock, patch

from typer.testing import CliRunner

from cli import app
from rancher_e2e.charts import InstallOptions
from rancher_e2e.monitoring import RancherMonitoringOpts
from rancher_e2e.nodeproviders import NodeProviderNotFoundError

runner = CliRunner()


class TestInstallMonitoring:
    @patch("rancher_e2e.commands.install_cmd.install_rancher_monitoring_chart")
    def test_install(self, install):
        result = runner.invoke(app, [
            "install", "monitoring",
            "--cluster-id", "c-m-1", "--cluster-name", "downstream", "--version", "102.0.0",
            "--rke-etcd",
        ])

        assert result.exit_code == 0, result.output
        client, install_options, opts = install.call_args.args
        assert install_options == InstallOptions(cluster_name="downstream", cluster_id="c-m-1", version="102.0.0")
        assert opts == RancherMonitoringOpts(rke_etcd=True)
        assert len(client.session) == 0

    @patch("rancher_e2e.commands.install_cmd.install_rancher_monitoring_chart")
    def test_install_with_cleanup(self, install):
        cleanup = MagicMock()
        install.side_effect = lambda client, *_: client.session.register_cleanup(cleanup)

        result = runner.invoke(app, [
            "install", "monitoring",
            "--cluster-id", "c-m-1", "--cluster-name", "downstream", "--version", "102.0.0", "--cleanup",
        ])

        assert result.exit_code == 0, result.output
        cleanup.assert_called_once_with()

    def test_missing_required_option(self):
        result = runner.invoke(app, ["install", "monitoring", "--cluster-id", "c-m-1"])

        assert result.exit_code == 2


class TestUninstallMonitoring:
    @patch("rancher_e2e.commands.uninstall_cmd.uninstall_rancher_monitoring_chart")
    def test_uninstall(self, uninstall):
        result = runner.invoke(app, ["uninstall", "monitoring", "--cluster-id", "c-m-1"])

        assert result.exit_code == 0, result.output
        uninstall.assert_called_once_with(ANY, "c-m-1")


class TestCreateCommands:
    @patch("rancher_e2e.commands.create_cmd.create_gke_hosted_cluster")
    def test_gke_cluster(self, create):
        create.return_value = {"id": "c-1", "name": "gke-e2e"}

        result = runner.invoke(app, [
            "create", "gke-cluster", "--name", "gke-e2e", "--cloud-credential", "cc-1",
            "--network-policy", "--label", "team=qa", "--label", "env=ci",
        ])

        assert result.exit_code == 0, result.output
        args = create.call_args.args
        assert args[1:] == ("gke-e2e", "cc-1", False, False, True, False, {"team": "qa", "env": "ci"})

    def test_gke_cluster_bad_label(self):
        result = runner.invoke(app, [
            "create", "gke-cluster", "--name", "gke-e2e", "--cloud-credential", "cc-1", "--label", "noequals",
        ])

        assert result.exit_code == 2

    def test_nodes_unknown_provider(self):
        result = runner.invoke(app, ["create", "nodes", "--provider", "gce"])

        assert result.exit_code == 1
        assert isinstance(result.exception, NodeProviderNotFoundError)

    def test_nodes_from_config(self, config_file, ssh_key):
        config_file({"externalNodes": {"nodes": {2: [
            {"nodeID": "n1", "publicIPAddress": "3.0.0.1", "sshUser": "ubuntu", "sshKeyName": "id_e2e"},
            {"nodeID": "n2", "publicIPAddress": "3.0.0.2", "sshUser": "ubuntu", "sshKeyName": "id_e2e"},
        ]}}})
        ssh_key("id_e2e")

        result = runner.invoke(app, ["create", "nodes", "--provider", "config", "--count", "2"])

        assert result.exit_code == 0, result.output

    def test_nodes_count_must_be_positive(self):
        result = runner.invoke(app, ["create", "nodes", "--count", "0"])

        assert result.exit_code == 2


class TestDeleteCommands:
    @patch("rancher_e2e.commands.delete_cmd.RancherClient")
    def test_delete_gke_cluster(self, rancher_client):
        result = runner.invoke(app, ["delete", "gke-cluster", "--cluster-id", "c-1"])

        assert result.exit_code == 0, result.output
        rancher_client.from_config.return_value.management.delete_cluster.assert_called_once_with("c-1")

    @patch("rancher_e2e.commands.delete_cmd.RancherClient")
    def test_delete_missing_cluster(self, rancher_client):
        resp = requests.Response()
        resp.status_code = 404
        rancher_client.from_config.return_value.management.delete_cluster.side_effect = requests.HTTPError(
            "404 Not Found", response=resp,
        )

        result = runner.invoke(app, ["delete", "gke-cluster", "--cluster-id", "c-1"])

        assert result.exit_code == 0, result.output

    @patch("rancher_e2e.commands.delete_cmd.RancherClient")
    def test_delete_error_propagates(self, rancher_client):
        resp = requests.Response()
        resp.status_code = 403
        rancher_client.from_config.return_value.management.delete_cluster.side_effect = requests.HTTPError(
            "403 Forbidden", response=resp,
        )

        result = runner.invoke(app, ["delete", "gke-cluster", "--cluster-id", "c-1"])

        assert result.exit_code == 1
        assert isinstance(result.exception, requests.HTTPError)


@pytest.mark.parametrize("group", ["create", "delete", "install", "uninstall"])
def test_help(group):
    result = runner.invoke(app, [group, "--help"])

    assert result.exit_code == 0
