"""
In-memory name service used in place of the deployed contracts.

The fakes expose the same methods as the model classes and record every
mutating call in FakeChain.writes, so tests can count transactions.
"""
import pytest
from eth_utils import keccak, to_checksum_address

from service.chain_directory import ChainDirectory, MAINNET, OPTIMISM, BASE, evm_coin_type
from service.name_grammar import child_node, namehash, reverse_node, token_id
from service.orchestrator import NameBinder

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

REGISTRY = to_checksum_address("0x" + "11" * 20)
PUBLIC_RESOLVER = to_checksum_address("0x" + "22" * 20)
NAME_WRAPPER = to_checksum_address("0x" + "33" * 20)
REVERSE_REGISTRAR = to_checksum_address("0x" + "44" * 20)
L2_REVERSE_REGISTRAR = to_checksum_address("0x" + "55" * 20)
CUSTOM_RESOLVER = to_checksum_address("0x" + "66" * 20)

CALLER = to_checksum_address("0xabcd" + "00" * 18)
OTHER = to_checksum_address("0x" + "b0" * 20)
TARGET = to_checksum_address("0x" + "c0" * 20)

PARENT = "domain.eth"
FULL_NAME = "app.domain.eth"

TEST_TABLE = {
    MAINNET: {
        "registry": REGISTRY,
        "public_resolver": PUBLIC_RESOLVER,
        "name_wrapper": NAME_WRAPPER,
        "reverse_registrar": REVERSE_REGISTRAR,
        "coin_type": 60,
    },
    OPTIMISM: {
        "registry": REGISTRY,
        "public_resolver": PUBLIC_RESOLVER,
        "reverse_registrar": L2_REVERSE_REGISTRAR,
        "coin_type": evm_coin_type(OPTIMISM),
    },
    BASE: {
        "registry": REGISTRY,
        "public_resolver": PUBLIC_RESOLVER,
        "reverse_registrar": REVERSE_REGISTRAR,
        "coin_type": evm_coin_type(BASE),
    },
}


class FakeChain():
    def __init__(self):
        self.owners = {}
        self.node_resolvers = {}
        self.wrapped = set()
        self.wrapper_owners = {}
        self.addrs = {}
        self.names = {}
        self.texts = {}
        self.l2_names = {}
        self.writes = []
        self.failing = set()

    def check(self, operation):
        if operation in self.failing:
            raise RuntimeError("{} reverted".format(operation))

    def write(self, operation, *args):
        self.check(operation)
        self.writes.append((operation,) + args)

    def written(self, operation):
        return [w for w in self.writes if w[0] == operation]


class FakeRegistry():
    def __init__(self, chain):
        self.chain = chain

    def owner_of(self, node):
        self.chain.check("registry.owner")
        return self.chain.owners.get(node, ZERO_ADDRESS)

    def resolver_of(self, node):
        return self.chain.node_resolvers.get(node, ZERO_ADDRESS)

    def create_subnode(self, node, label_hash, owner, resolver, ttl=0):
        self.chain.write("registry.create_subnode", node, label_hash, owner, resolver)
        child = keccak(node + label_hash)
        self.chain.owners[child] = owner
        self.chain.node_resolvers[child] = resolver

    def set_owner(self, node, owner):
        self.chain.write("registry.set_owner", node, owner)
        self.chain.owners[node] = owner


class FakeNameWrapper():
    def __init__(self, chain, address):
        self.chain = chain
        self.address = address

    def is_wrapped(self, node):
        self.chain.check("wrapper.is_wrapped")
        return node in self.chain.wrapped

    def owner_of(self, token):
        return self.chain.wrapper_owners.get(token, ZERO_ADDRESS)

    def create_subnode(self, parent_node, label, owner, resolver, ttl=0, fuses=0, expiry=0):
        self.chain.write("wrapper.create_subnode", parent_node, label, owner, resolver, ttl, fuses, expiry)
        child = child_node(parent_node, label)
        self.chain.wrapped.add(child)
        self.chain.wrapper_owners[token_id(child)] = owner
        self.chain.owners[child] = self.address
        self.chain.node_resolvers[child] = resolver


class FakeResolver():
    def __init__(self, chain, address):
        self.chain = chain
        self.contract_address = address.lower()

    def address(self, node, coin_type):
        self.chain.check("resolver.addr")
        return self.chain.addrs.get((self.contract_address, node, coin_type), b"")

    def set_address(self, node, coin_type, value):
        self.chain.write("resolver.set_address", node, coin_type, value)
        self.chain.addrs[(self.contract_address, node, coin_type)] = value

    def name(self, node):
        return self.chain.names.get((self.contract_address, node), "")

    def text(self, node, key):
        return self.chain.texts.get((self.contract_address, node, key), "")

    def set_text(self, node, key, value):
        self.chain.write("resolver.set_text", node, key, value)
        self.chain.texts[(self.contract_address, node, key)] = value


class FakeReverseRegistrar():
    def __init__(self, chain):
        self.chain = chain

    def reverse_node_of(self, identity):
        return reverse_node(identity)

    def set_name_for_addr(self, identity, owner, resolver, name):
        self.chain.write("reverse.set_name_for_addr", identity, owner, resolver, name)
        node = reverse_node(identity)
        self.chain.owners[node] = owner
        self.chain.node_resolvers[node] = resolver
        self.chain.names[(resolver.lower(), node)] = name


class FakeL2ReverseRegistrar():
    def __init__(self, chain):
        self.chain = chain

    def name_for_addr(self, identity):
        return self.chain.l2_names.get(identity.lower(), "")

    def set_name_for_addr(self, identity, name):
        self.chain.write("l2reverse.set_name_for_addr", identity, name)
        self.chain.l2_names[identity.lower()] = name


class FakeProvider():
    def __init__(self, chain, caller=CALLER):
        self.chain = chain
        self.caller = caller
        self.calls = []

    def registry(self, network_id, address):
        self.calls.append(("registry", network_id, address))
        return FakeRegistry(self.chain)

    def resolver(self, network_id, address):
        self.calls.append(("resolver", network_id, address))
        return FakeResolver(self.chain, address)

    def name_wrapper(self, network_id, address):
        self.calls.append(("name_wrapper", network_id, address))
        return FakeNameWrapper(self.chain, address)

    def reverse_registrar(self, network_id, address):
        self.calls.append(("reverse_registrar", network_id, address))
        return FakeReverseRegistrar(self.chain)

    def l2_reverse_registrar(self, network_id, address):
        self.calls.append(("l2_reverse_registrar", network_id, address))
        return FakeL2ReverseRegistrar(self.chain)


@pytest.fixture
def directory():
    return ChainDirectory(table=TEST_TABLE)


@pytest.fixture
def chain():
    """CALLER owns domain.eth in the registry, unwrapped, no resolver set."""
    fake = FakeChain()
    fake.owners[namehash(PARENT)] = CALLER
    return fake


@pytest.fixture
def provider(chain):
    return FakeProvider(chain)


@pytest.fixture
def binder(provider, directory):
    return NameBinder(provider, directory)


def wrap(chain, name, owner):
    """Move an existing name behind the name wrapper."""
    node = namehash(name)
    chain.wrapped.add(node)
    chain.wrapper_owners[token_id(node)] = owner
    chain.owners[node] = NAME_WRAPPER
