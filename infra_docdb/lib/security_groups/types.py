from dataclasses import dataclass
from typing import Optional


@dataclass
class SecurityGroupIngressRule:
    description: str
    """Description of the rule"""

    from_port: int
    """The start port (or ICMP type number if protocol is "icmp" or "icmpv6")"""

    to_port: int
    """The end port (or ICMP code if protocol is "icmp")"""

    protocol: str
    """
    The protocol. If not icmp, icmpv6, tcp, udp, or all use the
    [protocol number](https://www.iana.org/assignments/protocol-numbers/protocol-numbers.xhtml)
    """

    cidr_blocks: Optional[list[str]] = None
    """List of CIDR blocks allowed by this rule"""

    self: Optional[bool] = False
    """If true, the security group itself will be added as a source to this ingress rule"""
