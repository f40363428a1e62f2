# This file is boilerplate. Copy it to any new sysenv you create.
# It calls the launcher that ships with `infra_docdb`, which picks the module to run from the stack name:
# the `documentdb` stack runs the DocumentDB module.
from infra_docdb.launcher import run_active_stack

run_active_stack("aws")
