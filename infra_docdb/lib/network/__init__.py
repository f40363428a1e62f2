from .cidr import subnet_cidrs, MAX_SUBNET_PREFIX
