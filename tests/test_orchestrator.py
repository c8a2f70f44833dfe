"""
End to end binding scenarios against the in-memory name service
"""
import pytest
from eth_utils import to_bytes

from service.chain_directory import ARBITRUM, BASE, LINEA, MAINNET, OPTIMISM, ChainDirectory, evm_coin_type
from service.exceptions import (
    ForwardResolutionFailed,
    InvalidNameFormat,
    InvalidTarget,
    NameBindingError,
    NodeOwnedByOther,
    NotAuthorized,
    OwnershipTransferFailed,
    ReverseResolutionFailed,
    SubnameCreationFailed,
    UnsupportedNetwork,
)
from service.name_grammar import namehash, reverse_node, token_id
from service.orchestrator import (
    AUTHORIZED,
    FORWARD_SET,
    PARSED,
    REVERSE_SET,
    START,
    SUBNAME_READY,
    NameBinder,
    validate_target,
)
from service.record_writers import BASENAME_TEXT_KEY

from conftest import (
    CALLER,
    FULL_NAME,
    OTHER,
    PARENT,
    PUBLIC_RESOLVER,
    TARGET,
    ZERO_ADDRESS,
    FakeProvider,
    wrap,
)

NODE = namehash(FULL_NAME)


def test_bind_name_mainnet(binder, chain):
    result = binder.bind_name(MAINNET, CALLER, FULL_NAME)

    assert result.state == REVERSE_SET
    assert result.family == "l1"
    assert result.node == NODE
    assert result.parent_node == namehash(PARENT)
    assert chain.owners[NODE] == CALLER
    assert chain.addrs[(PUBLIC_RESOLVER.lower(), NODE, 60)] == to_bytes(hexstr=CALLER)
    assert binder.writer.current_reverse_name(MAINNET, reverse_node(CALLER)) == FULL_NAME
    assert len(chain.writes) == 3


def test_bind_name_twice_issues_no_more_writes(binder, chain):
    binder.bind_name(MAINNET, CALLER, FULL_NAME)
    writes = list(chain.writes)

    result = binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert result.state == REVERSE_SET
    assert chain.writes == writes


def test_bind_name_for_other_target(binder, chain):
    binder.bind_name(MAINNET, TARGET, FULL_NAME)
    assert chain.owners[NODE] == CALLER
    assert chain.addrs[(PUBLIC_RESOLVER.lower(), NODE, 60)] == to_bytes(hexstr=TARGET)
    assert chain.written("reverse.set_name_for_addr")[0][1] == TARGET


def test_subname_owned_by_other(binder, chain):
    chain.owners[NODE] = OTHER
    with pytest.raises(NodeOwnedByOther) as ex:
        binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert ex.value.stage == AUTHORIZED
    assert chain.writes == []


def test_caller_not_parent_owner(chain, directory):
    binder = NameBinder(FakeProvider(chain, caller=OTHER), directory)
    with pytest.raises(NotAuthorized) as ex:
        binder.bind_name(MAINNET, OTHER, FULL_NAME)
    assert ex.value.stage == PARSED
    assert chain.writes == []


def test_no_caller_is_not_authorized(chain, directory):
    binder = NameBinder(FakeProvider(chain, caller=None), directory)
    with pytest.raises(NotAuthorized):
        binder.bind_name(MAINNET, TARGET, FULL_NAME)


def test_unsupported_network_makes_no_remote_call(binder, provider):
    with pytest.raises(UnsupportedNetwork) as ex:
        binder.bind_name(424242, CALLER, FULL_NAME)
    assert ex.value.stage == START
    assert provider.calls == []


@pytest.mark.parametrize("target", [ZERO_ADDRESS, "", None, "0x1234", "not an address"])
def test_invalid_target(binder, provider, target):
    with pytest.raises(InvalidTarget):
        binder.bind_name(MAINNET, target, FULL_NAME)
    assert provider.calls == []


@pytest.mark.parametrize("name", ["", "eth", "app.", ".domain.eth"])
def test_invalid_name(binder, provider, name):
    with pytest.raises(InvalidNameFormat) as ex:
        binder.bind_name(MAINNET, CALLER, name)
    assert ex.value.stage == START
    assert provider.calls == []


def test_forward_only_on_base(binder, chain):
    result = binder.bind_forward_only(BASE, CALLER, FULL_NAME)
    assert result.state == FORWARD_SET
    assert result.family == "base"
    assert chain.addrs[(PUBLIC_RESOLVER.lower(), NODE, evm_coin_type(BASE))] == to_bytes(hexstr=CALLER)
    assert chain.written("resolver.set_text") == []
    assert chain.written("reverse.set_name_for_addr") == []


def test_bind_name_on_base_sets_basename_alias(binder, chain):
    result = binder.bind_name(BASE, CALLER, FULL_NAME)
    assert result.state == REVERSE_SET
    rnode = reverse_node(CALLER)
    assert chain.texts[(PUBLIC_RESOLVER.lower(), rnode, BASENAME_TEXT_KEY)] == FULL_NAME
    assert len(chain.written("reverse.set_name_for_addr")) == 1

    writes = list(chain.writes)
    binder.bind_name(BASE, CALLER, FULL_NAME)
    assert chain.writes == writes


def test_bind_name_on_l2(binder, chain):
    result = binder.bind_name(OPTIMISM, CALLER, FULL_NAME)
    assert result.family == "l2"
    assert chain.l2_names[CALLER.lower()] == FULL_NAME
    assert chain.addrs[(PUBLIC_RESOLVER.lower(), NODE, evm_coin_type(OPTIMISM))] == to_bytes(hexstr=CALLER)
    assert chain.written("reverse.set_name_for_addr") == []


def test_bind_name_under_wrapped_parent(binder, chain):
    wrap(chain, PARENT, CALLER)
    result = binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert result.state == REVERSE_SET
    assert len(chain.written("wrapper.create_subnode")) == 1
    assert chain.written("registry.create_subnode") == []
    assert chain.wrapper_owners[token_id(NODE)] == CALLER

    writes = list(chain.writes)
    binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert chain.writes == writes


def test_subname_failure(binder, chain):
    chain.failing.add("registry.create_subnode")
    with pytest.raises(SubnameCreationFailed) as ex:
        binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert ex.value.stage == AUTHORIZED


def test_forward_failure_keeps_subname_and_retry_completes(binder, chain):
    chain.failing.add("resolver.set_address")
    with pytest.raises(ForwardResolutionFailed) as ex:
        binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert ex.value.stage == SUBNAME_READY
    assert chain.owners[NODE] == CALLER

    chain.failing.clear()
    result = binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert result.state == REVERSE_SET
    assert len(chain.written("registry.create_subnode")) == 1


def test_reverse_failure_is_a_hard_failure(binder, chain):
    chain.failing.add("reverse.set_name_for_addr")
    with pytest.raises(ReverseResolutionFailed) as ex:
        binder.bind_name(MAINNET, CALLER, FULL_NAME)
    assert ex.value.stage == FORWARD_SET
    assert isinstance(ex.value, NameBindingError)
    assert "FORWARD_SET" in str(ex.value)
    assert len(chain.written("resolver.set_address")) == 1


def test_base_alias_failure(binder, chain):
    chain.failing.add("resolver.set_text")
    with pytest.raises(ReverseResolutionFailed):
        binder.bind_name(BASE, CALLER, FULL_NAME)


def test_lookup(binder, chain):
    before = binder.lookup(MAINNET, FULL_NAME)
    assert before.owner is None
    assert before.address is None
    assert before.resolver == PUBLIC_RESOLVER

    binder.bind_forward_only(MAINNET, TARGET, FULL_NAME)
    writes = list(chain.writes)
    after = binder.lookup(MAINNET, FULL_NAME)
    assert after.node == NODE
    assert after.owner == CALLER
    assert after.wrapped is False
    assert after.address == TARGET
    assert chain.writes == writes


def test_lookup_unsupported_network(binder):
    with pytest.raises(UnsupportedNetwork):
        binder.lookup(424242, FULL_NAME)


def test_hand_over(binder, chain):
    binder.bind_forward_only(MAINNET, TARGET, FULL_NAME)
    assert binder.hand_over(MAINNET, FULL_NAME, TARGET) == TARGET
    assert chain.owners[NODE] == TARGET
    assert len(chain.written("registry.set_owner")) == 1

    assert binder.hand_over(MAINNET, FULL_NAME, TARGET) == TARGET
    assert len(chain.written("registry.set_owner")) == 1


def test_hand_over_requires_ownership(binder, chain):
    chain.owners[NODE] = OTHER
    with pytest.raises(NotAuthorized):
        binder.hand_over(MAINNET, FULL_NAME, TARGET)


def test_hand_over_wrapped_rejected(binder, chain):
    wrap(chain, PARENT, CALLER)
    with pytest.raises(NotAuthorized):
        binder.hand_over(MAINNET, PARENT, TARGET)


def test_hand_over_failure(binder, chain):
    chain.failing.add("registry.set_owner")
    with pytest.raises(OwnershipTransferFailed):
        binder.hand_over(MAINNET, PARENT, TARGET)


def test_validate_target_checksums():
    assert validate_target(TARGET.lower()) == TARGET


def test_bind_name_on_linea_with_default_directory(chain):
    provider = FakeProvider(chain)
    binder = NameBinder(provider, ChainDirectory())
    services = binder.directory.services_for(LINEA)

    result = binder.bind_name(LINEA, CALLER, FULL_NAME)
    assert result.family == "l2"
    assert result.state == REVERSE_SET
    assert chain.l2_names[CALLER.lower()] == FULL_NAME
    assert chain.addrs[(services.public_resolver.lower(), NODE, evm_coin_type(LINEA))] == to_bytes(hexstr=CALLER)
    assert ("l2_reverse_registrar", LINEA, services.reverse_registrar) in provider.calls

    writes = list(chain.writes)
    binder.bind_name(LINEA, CALLER, FULL_NAME)
    assert chain.writes == writes


def test_bind_name_on_configured_l2(chain):
    overrides = {ARBITRUM: {"registry": "0x" + "12" * 20, "public_resolver": "0x" + "34" * 20}}
    binder = NameBinder(FakeProvider(chain), ChainDirectory(overrides=overrides))
    result = binder.bind_name(ARBITRUM, CALLER, FULL_NAME)
    assert result.family == "l2"
    assert chain.l2_names[CALLER.lower()] == FULL_NAME
