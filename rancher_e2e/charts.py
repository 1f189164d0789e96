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

"""Chart install and uninstall action payloads for the Rancher catalog API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rancher_e2e.constants import (
    ANNOTATION_UI_SOURCE_REPO,
    ANNOTATION_UI_SOURCE_REPO_TYPE,
    CHART_INSTALL_TIMEOUT,
    RANCHER_CHARTS_REPO,
)


# ============================================================================
# Options
# ============================================================================

@dataclass(frozen=True)
class InstallOptions:
    """Where and which version of a chart to install.

    Attributes:
        cluster_name: Display name of the target cluster.
        cluster_id: Rancher ID of the target cluster.
        version: Chart version.
        project_id: Project the install namespace is placed in, or empty.
    """

    cluster_name: str
    cluster_id: str
    version: str
    project_id: str = ""


@dataclass(frozen=True)
class PayloadOpts:
    """Install options completed with the chart identity and Rancher host."""

    install_options: InstallOptions
    name: str
    namespace: str
    host: str


# ============================================================================
# Payload models
# ============================================================================

class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialise to the camelCase JSON body expected by the API."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ChartInstall(_Payload):
    chart_name: str
    version: str
    release_name: str
    values: dict[str, Any] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class ChartInstallAction(_Payload):
    disable_hooks: bool = False
    disable_open_api_validation: bool = Field(default=False, alias="disableOpenAPIValidation")
    timeout: str = CHART_INSTALL_TIMEOUT
    wait: bool = True
    namespace: str
    project_id: str = ""
    charts: list[ChartInstall]


class ChartUninstallAction(_Payload):
    disable_hooks: bool = False
    dry_run: bool = False
    keep_history: bool = False
    timeout: str | None = None
    description: str = ""


# ============================================================================
# Builders
# ============================================================================

def new_chart_install(
    name: str,
    version: str,
    cluster_id: str,
    cluster_name: str,
    url: str,
    chart_values: dict[str, Any] | None,
) -> ChartInstall:
    """Build one chart entry of an install action.

    The ``global`` block carries the cluster identity Rancher charts expect;
    *chart_values* are merged on top at the root level.

    Args:
        name: Chart name, also used as the release name.
        version: Chart version.
        cluster_id: Rancher ID of the target cluster.
        cluster_name: Display name of the target cluster.
        url: Rancher server URL.
        chart_values: Chart-specific values, or None.

    Returns:
        The chart install entry.
    """
    values: dict[str, Any] = {
        "global": {
            "cattle": {
                "clusterId": cluster_id,
                "clusterName": cluster_name,
                "rkePathPrefix": "",
                "rkeWindowsPathPrefix": "",
                "systemDefaultRegistry": "",
                "url": url,
            },
            "systemDefaultRegistry": "",
        },
    }
    values.update(chart_values or {})
    return ChartInstall(
        chart_name=name,
        version=version,
        release_name=name,
        values=values,
        annotations={
            ANNOTATION_UI_SOURCE_REPO: RANCHER_CHARTS_REPO,
            ANNOTATION_UI_SOURCE_REPO_TYPE: "cluster",
        },
    )


def new_chart_install_action(namespace: str, project_id: str, charts: list[ChartInstall]) -> ChartInstallAction:
    """Build an install action that waits for the release to settle."""
    return ChartInstallAction(namespace=namespace, project_id=project_id, charts=charts)


def new_chart_uninstall_action() -> ChartUninstallAction:
    """Build the default uninstall action."""
    return ChartUninstallAction()
