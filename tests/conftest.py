import json
import random
from typing import Callable

import pytest
from eth_utils import to_checksum_address

from nethermind.evm_rpc.rpc import FixedNonceGenerator
from nethermind.evm_rpc.types.rpc import TransportArguments
from tests.resources.ABI import ERC20_ABI_JSON, METADATA_ABI_JSON

ERC20_ABI_URL = "https://abi.example/erc20.json"
METADATA_ABI_URL = "https://abi.example/metadata.json"
NODE_URL = "https://node.example/rpc"


class StaticTransport:
    """
    Transport returning canned responses.  Records every request & fetch it receives.  A response may also be a
    callable taking the request id, for requests whose id is not known up front.
    """

    def __init__(
        self,
        documents: dict[str, str] | None = None,
        responses: list[str | Callable[[int], str]] | None = None,
    ):
        self.documents = documents or {}
        self.responses = list(responses or [])
        self.executed: list[TransportArguments] = []
        self.fetched: list[str] = []

    def execute(self, args: TransportArguments) -> str:
        self.executed.append(args)
        response = self.responses.pop(0)
        if callable(response):
            return response(json.loads(args.body)["id"])
        return response

    def fetch(self, url: str) -> str:
        self.fetched.append(url)
        return self.documents[url]

    def sent_bodies(self) -> list[dict]:
        return [json.loads(args.body) for args in self.executed]


@pytest.fixture(name="static_transport")
def fixture_static_transport():
    def _create_transport(*responses: str | Callable[[int], str]) -> StaticTransport:
        return StaticTransport(
            documents={ERC20_ABI_URL: ERC20_ABI_JSON, METADATA_ABI_URL: METADATA_ABI_JSON},
            responses=list(responses),
        )

    return _create_transport


@pytest.fixture(name="fixed_nonces")
def fixture_fixed_nonces():
    def _create_generator(*values: int) -> FixedNonceGenerator:
        return FixedNonceGenerator(values)

    return _create_generator


@pytest.fixture(name="erc20_abi")
def fixture_erc20_abi():
    return json.loads(ERC20_ABI_JSON)


@pytest.fixture(name="metadata_abi")
def fixture_metadata_abi():
    return json.loads(METADATA_ABI_JSON)


@pytest.fixture(name="random_address")
def fixture_random_address():
    def _generate_random_address():
        return to_checksum_address(random.randbytes(20).hex())

    return _generate_random_address
