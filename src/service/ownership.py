#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-12 14:20:36
LastEditors: Zella Zhong
LastEditTime: 2024-10-20 11:40:02
FilePath: /name_binding/src/service/ownership.py
Description: node owner, wrapped status and resolver discovery
'''
import logging

from eth_utils import encode_hex, to_checksum_address

from service.exceptions import UnsupportedNetwork
from service.failure_policy import call_with_policy
from service.name_grammar import token_id

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_zero_address(address):
    return address is None or int(address, 16) == 0


def same_address(a, b):
    if is_zero_address(a) or is_zero_address(b):
        return False
    return a.lower() == b.lower()


def normalize_address(address):
    '''zero address -> None, otherwise checksum'''
    if is_zero_address(address):
        return None
    return to_checksum_address(address)


class OwnershipResolver():
    '''
    description: reads ownership state from the registry / name wrapper of a network
    '''
    def __init__(self, directory, provider):
        self.directory = directory
        self.provider = provider

    def services(self, network_id):
        '''
        description: ServiceSet of a network, registry must be present
        '''
        services = self.directory.services_for(network_id)
        if services.registry is None:
            raise UnsupportedNetwork("no registry known for network {}".format(network_id))
        return services

    def registry(self, network_id):
        return self.provider.registry(network_id, self.services(network_id).registry)

    def is_wrapped(self, network_id, node):
        '''
        description: wrapped status, a missing or failing wrapper means not wrapped
        return bool
        '''
        services = self.services(network_id)
        if services.name_wrapper is None:
            return False
        wrapper = self.provider.name_wrapper(network_id, services.name_wrapper)
        return bool(call_with_policy("is_wrapped", wrapper.is_wrapped, node))

    def owner_of(self, network_id, node, wrapped=None):
        '''
        description: owner of a node, through the wrapper when the node is wrapped
        param: wrapped known wrapped status, looked up when None
        return checksum address, None when unowned
        '''
        if wrapped is None:
            wrapped = self.is_wrapped(network_id, node)
        if wrapped:
            services = self.services(network_id)
            wrapper = self.provider.name_wrapper(network_id, services.name_wrapper)
            owner = wrapper.owner_of(token_id(node))
        else:
            owner = self.registry(network_id).owner_of(node)
        return normalize_address(owner)

    def is_caller_owner(self, network_id, node, caller):
        owner = self.owner_of(network_id, node)
        logging.debug("node {} owner {} caller {}".format(encode_hex(node), owner, caller))
        return same_address(owner, caller)

    def resolver_for(self, network_id, node):
        '''
        description: resolver set on the node, else the network public resolver (ENSIP-10 style)
        return checksum address, None when neither exists
        '''
        resolver = normalize_address(self.registry(network_id).resolver_of(node))
        if resolver is not None:
            return resolver
        return self.services(network_id).public_resolver
