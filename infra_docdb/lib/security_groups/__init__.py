from .ec2_generate_security_group import generate_security_group, ALLOW_ALL_EGRESS
from .types import SecurityGroupIngressRule
