#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-15 09:47:50
LastEditors: Zella Zhong
LastEditTime: 2024-10-21 16:20:14
FilePath: /name_binding/src/service/orchestrator.py
Description: bind a dotted name to an address, forward and reverse, safe to retry
'''
import logging
from collections import namedtuple

from eth_utils import encode_hex, is_address, to_checksum_address

import setting
from service.chain_directory import ChainDirectory, evm_coin_type
from service.exceptions import (
    NameBindingError,
    InvalidTarget,
    NotAuthorized,
    SubnameCreationFailed,
    ForwardResolutionFailed,
    ReverseResolutionFailed,
    OwnershipTransferFailed,
)
from service.failure_policy import call_with_policy
from service.name_grammar import name_coordinates, namehash
from service.ownership import OwnershipResolver, is_zero_address, same_address
from service.record_writers import RecordWriter
from service.strategies import select_strategy

START = "START"
PARSED = "PARSED"
AUTHORIZED = "AUTHORIZED"
SUBNAME_READY = "SUBNAME_READY"
FORWARD_SET = "FORWARD_SET"
REVERSE_SET = "REVERSE_SET"
FAILED = "FAILED"

BindResult = namedtuple("BindResult", ["network_id", "name", "node", "parent_node", "identity", "state", "family"])
LookupResult = namedtuple("LookupResult", ["network_id", "name", "node", "owner", "wrapped", "resolver", "address"])


def validate_target(address):
    '''
    description: the bound address must be a real, non-zero address
    return checksum address
    '''
    if not address or not is_address(address) or is_zero_address(address):
        raise InvalidTarget("invalid target address: {}".format(address))
    return to_checksum_address(address)


class NameBinder():
    '''
    description: NameBinder

    START -> PARSED -> AUTHORIZED -> SUBNAME_READY -> FORWARD_SET -> REVERSE_SET
    Any step may end in FAILED; the raised error carries the state it was
    leaving. Completed steps are never undone: a rerun finds them through the
    writers' read-before-write checks and moves on.
    '''
    def __init__(self, provider, directory=None):
        if directory is None:
            directory = ChainDirectory(overrides=setting.CHAIN_OVERRIDES)
        self.provider = provider
        self.directory = directory
        self.ownership = OwnershipResolver(directory, provider)
        self.writer = RecordWriter(self.ownership)

    def bind_name(self, network_id, identity, full_name, caller=None):
        '''
        description: subname + forward record + primary name (and basename alias on base)
        param: network_id
        param: identity target address
        param: full_name "label.parent"
        param: caller owner of parent, defaults to the provider signer
        return BindResult
        '''
        return self._bind(network_id, identity, full_name, caller, with_reverse=True)

    def bind_forward_only(self, network_id, identity, full_name, caller=None):
        '''
        description: subname + forward record, stops at FORWARD_SET
        return BindResult
        '''
        return self._bind(network_id, identity, full_name, caller, with_reverse=False)

    def _transition(self, full_name, state, next_state):
        logging.info("bind {}: {} -> {}".format(full_name, state, next_state))
        return next_state

    def _bind(self, network_id, identity, full_name, caller, with_reverse):
        if caller is None:
            caller = self.provider.caller
        state = START
        try:
            target = validate_target(identity)
            label, parent, parent_node, node = name_coordinates(full_name)
            services = self.ownership.services(network_id)
            coin_type = services.coin_type
            if coin_type is None:
                coin_type = evm_coin_type(network_id)
            state = self._transition(full_name, state, PARSED)

            if not self.ownership.is_caller_owner(network_id, parent_node, caller):
                raise NotAuthorized("{} does not own {}".format(caller, parent))
            state = self._transition(full_name, state, AUTHORIZED)

            strategy = select_strategy(network_id, self.writer)
            if not strategy.ensure_subname(network_id, parent_node, label, caller):
                raise SubnameCreationFailed("could not create {}".format(full_name))
            state = self._transition(full_name, state, SUBNAME_READY)

            if not strategy.ensure_forward(network_id, node, coin_type, target):
                raise ForwardResolutionFailed("could not set addr of {} to {}".format(full_name, target))
            state = self._transition(full_name, state, FORWARD_SET)

            if with_reverse:
                if not strategy.ensure_reverse(network_id, target, node, full_name):
                    raise ReverseResolutionFailed("could not set primary name of {} to {}".format(target, full_name))
                state = self._transition(full_name, state, REVERSE_SET)

            logging.info("bind {} -> {} on network {} done at {}".format(full_name, target, network_id, state))
            return BindResult(network_id, full_name, node, parent_node, target, state, strategy.family)
        except NameBindingError as ex:
            if ex.stage is None:
                ex.stage = state
            logging.error("bind {} on network {} {} at {}: {}".format(
                full_name, network_id, FAILED, state, ex.message))
            raise

    def lookup(self, network_id, full_name):
        '''
        description: current binding status of a name, read only
        return LookupResult
        '''
        name_coordinates(full_name)
        services = self.ownership.services(network_id)
        coin_type = services.coin_type
        if coin_type is None:
            coin_type = evm_coin_type(network_id)

        node = namehash(full_name)
        wrapped = self.ownership.is_wrapped(network_id, node)
        owner = self.ownership.owner_of(network_id, node, wrapped=wrapped)
        resolver_address = self.ownership.resolver_for(network_id, node)
        address = None
        if resolver_address is not None:
            resolver = self.provider.resolver(network_id, resolver_address)
            raw = call_with_policy("read_address", resolver.address, node, coin_type)
            if raw and len(raw) == 20:
                address = to_checksum_address(raw)
        return LookupResult(network_id, full_name, node, owner, wrapped, resolver_address, address)

    def hand_over(self, network_id, full_name, new_owner, caller=None):
        '''
        description: move an unwrapped node to new_owner, a repeat is a no-op
        return checksum address of the owner after the call
        '''
        if caller is None:
            caller = self.provider.caller
        try:
            new_owner = validate_target(new_owner)
            name_coordinates(full_name)
            self.ownership.services(network_id)
            node = namehash(full_name)

            if self.ownership.is_wrapped(network_id, node):
                raise NotAuthorized("{} is wrapped, transfer the wrapper token instead".format(full_name))
            owner = self.ownership.owner_of(network_id, node, wrapped=False)
            if same_address(owner, new_owner):
                logging.info("hand over {}: already owned by {}".format(full_name, new_owner))
                return new_owner
            if not same_address(owner, caller):
                raise NotAuthorized("{} does not own {}".format(caller, full_name))
            if not self.writer.ensure_owner(network_id, node, new_owner):
                raise OwnershipTransferFailed("could not transfer {} ({}) to {}".format(
                    full_name, encode_hex(node), new_owner))
            return new_owner
        except NameBindingError as ex:
            logging.error("hand over {} on network {} failed: {}".format(full_name, network_id, ex.message))
            raise
