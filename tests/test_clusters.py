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
from unittest.mock import MagicMock

from rancher_e2e.clusters import create_gke_hosted_cluster, gke_host_cluster_config
from rancher_e2e.config import ConfigError

GKE_SECTION = {
    "gkeClusterConfig": {
        "projectID": "e2e-project",
        "zone": "us-central1-c",
        "kubernetesVersion": "1.27.3-gke.100",
        "labels": {"owner": "qa"},
        "nodePools": [{
            "name": "np-1",
            "initialNodeCount": 1,
            "config": {"machineType": "n2-standard-4"},
            "autoscaling": {"enabled": True, "minNodeCount": 1, "maxNodeCount": 3},
        }],
    },
}


class TestGKEHostClusterConfig:
    def test_spec_from_config_file(self, config_file):
        config_file(GKE_SECTION)

        spec = gke_host_cluster_config("gke-e2e", "cattle-global-data:cc-1")

        assert spec["clusterName"] == "gke-e2e"
        assert spec["googleCredentialSecret"] == "cattle-global-data:cc-1"
        assert spec["imported"] is False
        assert spec["projectID"] == "e2e-project"
        assert spec["zone"] == "us-central1-c"
        assert spec["kubernetesVersion"] == "1.27.3-gke.100"
        assert spec["labels"] == {"owner": "qa"}
        pool = spec["nodePools"][0]
        assert pool["name"] == "np-1"
        assert pool["initialNodeCount"] == 1
        assert pool["config"]["machineType"] == "n2-standard-4"
        assert pool["config"]["diskSizeGb"] == 100
        assert pool["autoscaling"] == {"enabled": True, "maxNodeCount": 3, "minNodeCount": 1}
        assert pool["management"] == {"autoRepair": True, "autoUpgrade": True}
        assert "clusterIpv4CidrBlock" not in spec

    def test_defaults_when_section_missing(self, config_file):
        config_file({"rancher": {"host": "x"}})

        spec = gke_host_cluster_config("gke-e2e", "cc-1")

        assert spec["network"] == "default"
        assert len(spec["nodePools"]) == 1

    def test_unknown_keys_pass_through(self, config_file):
        config_file({"gkeClusterConfig": {"customField": {"a": 1}}})

        spec = gke_host_cluster_config("gke-e2e", "cc-1")

        assert spec["customField"] == {"a": 1}

    def test_missing_config_file(self):
        with pytest.raises(ConfigError):
            gke_host_cluster_config("gke-e2e", "cc-1")


class TestCreateGKEHostedCluster:
    def test_submits_cluster_and_returns_response(self, config_file):
        config_file(GKE_SECTION)
        client = MagicMock()
        client.management.create_cluster.return_value = {"id": "c-xyz", "name": "gke-e2e"}

        result = create_gke_hosted_cluster(
            client, "gke-e2e", "cc-1",
            enable_cluster_alerting=False,
            enable_cluster_monitoring=True,
            enable_network_policy=True,
            windows_prefered_cluster=False,
            labels={"team": "qa"},
        )

        assert result == {"id": "c-xyz", "name": "gke-e2e"}
        body = client.management.create_cluster.call_args[0][0]
        assert body["name"] == "gke-e2e"
        assert body["dockerRootDir"] == "/var/lib/docker"
        assert body["enableClusterAlerting"] is False
        assert body["enableClusterMonitoring"] is True
        assert body["enableNetworkPolicy"] is True
        assert body["windowsPreferedCluster"] is False
        assert body["labels"] == {"team": "qa"}
        assert body["gkeConfig"]["clusterName"] == "gke-e2e"

    def test_api_error_propagates(self, config_file):
        config_file(GKE_SECTION)
        client = MagicMock()
        err = requests.HTTPError("422 Unprocessable Entity")
        client.management.create_cluster.side_effect = err

        with pytest.raises(requests.HTTPError) as exc_info:
            create_gke_hosted_cluster(client, "gke-e2e", "cc-1", False, False, False, False, {})

        assert exc_info.value is err
