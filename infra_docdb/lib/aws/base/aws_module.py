from abc import ABC

from pulumi import ResourceOptions, Config

from infra_docdb.lib.base import BaseModule, ConfigType


class AWSModule(BaseModule, ABC):
    """
    Base class for modules using the AWS provider
    """

    provider: str = "aws"

    def __init__(self, name: str, config: ConfigType, opts: ResourceOptions = None):
        super().__init__(name, config, opts)

        self.region = Config(self.provider).require("region")
