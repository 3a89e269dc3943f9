import click
from dotenv import load_dotenv

from nethermind.evm_rpc.cli.contract import contract_group
from nethermind.evm_rpc.cli.rpc import rpc_group


@click.group()
def evm_rpc_cli():
    """Command Line Interface for Nethermind EVM RPC"""
    load_dotenv()


# Adding Command Groups
evm_rpc_cli.add_command(rpc_group, name="rpc")
evm_rpc_cli.add_command(contract_group, name="contract")
