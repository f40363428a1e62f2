from ipaddress import ip_network

# AWS rejects subnets smaller than /28
MAX_SUBNET_PREFIX = 28


def subnet_cidrs(cidr: str, count: int, newbits: int = 8) -> list[str]:
    """
    Carve ``count`` consecutive subnets out of a network CIDR

    `10.0.0.0/16` with 8 new bits gives `10.0.0.0/24`, `10.0.1.0/24`, ...

    :param cidr: Network CIDR
    :param count: Number of subnets to return
    :param newbits: Bits added to the network prefix length
    :return: Subnet CIDRs, in order
    """
    network = ip_network(cidr, strict=True)
    new_prefix = network.prefixlen + newbits

    if newbits < 1 or new_prefix > MAX_SUBNET_PREFIX:
        raise ValueError(f"cannot add {newbits} bits to `{cidr}`, subnets must be between /{network.prefixlen + 1} "
                         f"and /{MAX_SUBNET_PREFIX}")
    if count > 2 ** newbits:
        raise ValueError(f"`{cidr}` only fits {2 ** newbits} subnets of /{new_prefix}, {count} requested")

    subnets = network.subnets(new_prefix=new_prefix)
    return [str(next(subnets)) for _ in range(count)]
