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

"""EC2 instances as external nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import boto3
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from rich.panel import Panel
from tenacity import retry, stop_after_attempt, wait_fixed

from rancher_e2e import console, logger
from rancher_e2e.config import load_config
from rancher_e2e.constants import (
    AWS_EC2_CONFIG_KEY,
    EC2_DEFAULT_USER,
    EC2_DEFAULT_VOLUME_SIZE,
    EC2_INSTANCE_TAG_KEY,
    EC2_PUBLIC_IP_MAX_RETRIES,
    EC2_PUBLIC_IP_POLL_INTERVAL_SECONDS,
)
from rancher_e2e.nodes import Node, get_ssh_key
from rancher_e2e.utils import ignore_not_found

if TYPE_CHECKING:
    from rancher_e2e.clients import RancherClient


class AWSEC2Config(BaseModel):
    """EC2 settings read from the ``awsEC2Config`` config file section.

    Attributes:
        region: AWS region.
        access_key_id: Access key, or empty to use the default credential chain.
        secret_access_key: Secret key paired with *access_key_id*.
        instance_type: EC2 instance type.
        ami: Image ID.
        security_groups: Security group IDs.
        ssh_key_name: EC2 key pair name; ``<name>.pem`` is read from ``~/.ssh``.
        subnet_id: Subnet to launch into, or empty for the default.
        iam_profile: Instance profile name, or empty.
        user: SSH login user of the image.
        volume_size: Root volume size in GiB.
        instance_tag: Value of the ``Name`` tag on created instances.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    region: str = "us-east-2"
    access_key_id: str = ""
    secret_access_key: str = Field(default="", repr=False)
    instance_type: str = "t3a.medium"
    ami: str = ""
    security_groups: list[str] = Field(default_factory=list)
    ssh_key_name: str = ""
    subnet_id: str = ""
    iam_profile: str = ""
    user: str = EC2_DEFAULT_USER
    volume_size: int = Field(default=EC2_DEFAULT_VOLUME_SIZE, ge=1)
    instance_tag: str = "rancher-e2e"


def ec2_client(cfg: AWSEC2Config) -> Any:
    """Build a boto3 EC2 client from the config."""
    session_kwargs: dict[str, str] = {"region_name": cfg.region}
    if cfg.access_key_id:
        session_kwargs["aws_access_key_id"] = cfg.access_key_id
        session_kwargs["aws_secret_access_key"] = cfg.secret_access_key
    return boto3.session.Session(**session_kwargs).client("ec2")


def _run_instances_request(cfg: AWSEC2Config, count: int) -> dict[str, Any]:
    """Build the RunInstances arguments."""
    request: dict[str, Any] = {
        "ImageId": cfg.ami,
        "InstanceType": cfg.instance_type,
        "MinCount": count,
        "MaxCount": count,
        "KeyName": cfg.ssh_key_name,
        "SecurityGroupIds": cfg.security_groups,
        "BlockDeviceMappings": [{
            "DeviceName": "/dev/sda1",
            "Ebs": {"VolumeSize": cfg.volume_size, "VolumeType": "gp3", "DeleteOnTermination": True},
        }],
        "TagSpecifications": [{
            "ResourceType": "instance",
            "Tags": [{"Key": EC2_INSTANCE_TAG_KEY, "Value": cfg.instance_tag}],
        }],
    }
    if cfg.subnet_id:
        request["SubnetId"] = cfg.subnet_id
    if cfg.iam_profile:
        request["IamInstanceProfile"] = {"Name": cfg.iam_profile}
    return request


def terminate_instances(ec2: Any, instance_ids: list[str]) -> None:
    """Terminate instances and wait until they are gone.

    Instances that no longer exist count as terminated.
    """
    console.print(f"[yellow]\u2139\ufe0f  Terminating EC2 instances {', '.join(instance_ids)}...[/yellow]")
    _, found = ignore_not_found(lambda: ec2.terminate_instances(InstanceIds=instance_ids))
    if found:
        ec2.get_waiter("instance_terminated").wait(InstanceIds=instance_ids)
    console.print("[green]\u2705 EC2 instances terminated[/green]")


@retry(
    stop=stop_after_attempt(EC2_PUBLIC_IP_MAX_RETRIES),
    wait=wait_fixed(EC2_PUBLIC_IP_POLL_INTERVAL_SECONDS),
    reraise=True,
)
def _describe_with_public_ips(ec2: Any, instance_ids: list[str]) -> list[dict[str, Any]]:
    """Describe instances, retrying until each one has a public IP.

    Raises:
        RuntimeError: If an instance has no public IP yet.
    """
    resp = ec2.describe_instances(InstanceIds=instance_ids)
    instances = [inst for reservation in resp["Reservations"] for inst in reservation["Instances"]]
    pending = [inst["InstanceId"] for inst in instances if not inst.get("PublicIpAddress")]
    if pending:
        raise RuntimeError(f"Instances without public IP: {', '.join(pending)}")
    return instances


def create_nodes(client: RancherClient, num_of_instances: int) -> list[Node]:
    """Launch EC2 instances and describe them as nodes.

    Termination is registered on the client session right after the launch
    request succeeds.

    Args:
        client: Rancher client whose session receives the cleanup.
        num_of_instances: Number of instances to launch.

    Returns:
        Nodes with public/private IPs and the SSH key attached.
    """
    cfg = load_config(AWS_EC2_CONFIG_KEY, AWSEC2Config)
    console.print(Panel.fit(f"Creating {num_of_instances} EC2 instances ({cfg.instance_type})", style="bold blue"))
    ec2 = ec2_client(cfg)

    resp = ec2.run_instances(**_run_instances_request(cfg, num_of_instances))
    instance_ids = [inst["InstanceId"] for inst in resp["Instances"]]
    logger.info("Launched EC2 instances: %s", instance_ids)
    client.session.register_cleanup(lambda: terminate_instances(ec2, instance_ids))

    console.print("[yellow]\u2139\ufe0f  Waiting for instances to be running...[/yellow]")
    ec2.get_waiter("instance_running").wait(InstanceIds=instance_ids)
    instances = _describe_with_public_ips(ec2, instance_ids)

    ssh_key = get_ssh_key(f"{cfg.ssh_key_name}.pem")
    nodes = [
        Node(
            node_id=inst["InstanceId"],
            public_ip_address=inst["PublicIpAddress"],
            private_ip_address=inst.get("PrivateIpAddress", ""),
            ssh_user=cfg.user,
            ssh_key_name=cfg.ssh_key_name,
            ssh_key=ssh_key,
        )
        for inst in instances
    ]
    console.print(f"[green]\u2705 Created {len(nodes)} EC2 instances[/green]")
    return nodes
