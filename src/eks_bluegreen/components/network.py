"""
eks_bluegreen.components.network

VPC and control-plane security group for the cluster.

Responsibilities:
- Create the VPC with a configurable CIDR and NAT gateway count.
- Create the security group handed to the EKS control plane.
"""

from __future__ import annotations

from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from eks_bluegreen.observability.logging import get_logger

log = get_logger(__name__)


class Network(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        cidr: str,
        nat_gateways: int,
        ingress_port: int,
    ) -> None:
        super().__init__(scope, construct_id)

        self.vpc = ec2.Vpc(
            self,
            "NewVPC",
            ip_addresses=ec2.IpAddresses.cidr(cidr),
            nat_gateways=nat_gateways,
        )

        self.security_group = ec2.SecurityGroup(
            self,
            "SecurityGroup",
            vpc=self.vpc,
            allow_all_outbound=True,
        )
        self.security_group.add_ingress_rule(
            ec2.Peer.any_ipv4(),
            ec2.Port.tcp(ingress_port),
            "Allow all inbound traffic by default",
        )

        log.info(
            "component_added",
            component="network",
            cidr=cidr,
            nat_gateways=nat_gateways,
            ingress_port=ingress_port,
        )
