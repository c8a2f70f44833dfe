#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-13 15:02:19
LastEditors: Zella Zhong
LastEditTime: 2024-10-21 14:26:55
FilePath: /name_binding/src/service/record_writers.py
Description: read-compare-write upserts for subname, addr, reverse name and basename text
'''
import logging

from eth_utils import encode_hex, to_bytes

from service.exceptions import NodeOwnedByOther, ResolverUnavailable
from service.failure_policy import call_with_policy, write_with_policy
from service.name_grammar import EMPTY_NODE, child_node, labelhash
from service.ownership import ZERO_ADDRESS, normalize_address, same_address

BASENAME_TEXT_KEY = "basename"


class RecordWriter():
    '''
    description: every ensure_* reads the current value first and only writes
    when it differs, so a retried binding issues no duplicate transactions.
    Write failures come back as False (see failure_policy), conflicts raise.
    '''
    def __init__(self, ownership):
        self.ownership = ownership
        self.provider = ownership.provider

    def ensure_subname(self, network_id, parent_node, label, owner):
        '''
        description: create label.parent owned by owner, unless it already is
        param: parent_node bytes32
        param: label
        param: owner checksum address
        return True on success or no-op, False when the create call failed
        '''
        resolver = self.ownership.resolver_for(network_id, parent_node)
        node = child_node(parent_node, label)

        existing = self.ownership.owner_of(network_id, node)
        if existing is not None:
            if same_address(existing, owner):
                logging.info("subname {} already owned by {}, skip".format(encode_hex(node), owner))
                return True
            raise NodeOwnedByOther("subname {} owned by {}, not {}".format(encode_hex(node), existing, owner))

        if resolver is None:
            resolver = ZERO_ADDRESS
        if self.ownership.is_wrapped(network_id, parent_node):
            services = self.ownership.services(network_id)
            wrapper = self.provider.name_wrapper(network_id, services.name_wrapper)
            logging.info("create wrapped subname {} under {} owner={} resolver={}".format(
                label, encode_hex(parent_node), owner, resolver))
            return write_with_policy(
                "create_subnode", wrapper.create_subnode, parent_node, label, owner, resolver, 0, 0, 0)

        registry = self.ownership.registry(network_id)
        logging.info("create subname {} under {} owner={} resolver={}".format(
            label, encode_hex(parent_node), owner, resolver))
        return write_with_policy(
            "create_subnode", registry.create_subnode, parent_node, labelhash(label), owner, resolver, 0)

    def ensure_forward_record(self, network_id, node, coin_type, target_address):
        '''
        description: addr(node, coin_type) = target_address
        return True on success or no-op, False when setAddr failed
        '''
        resolver_address = self.ownership.resolver_for(network_id, node)
        if resolver_address is None:
            raise ResolverUnavailable("no resolver for {} on network {}".format(encode_hex(node), network_id))
        resolver = self.provider.resolver(network_id, resolver_address)

        desired = to_bytes(hexstr=target_address)
        current = call_with_policy("read_address", resolver.address, node, coin_type)
        if bytes(current or b"") == desired:
            logging.info("addr({}, {}) already {}, skip".format(encode_hex(node), coin_type, target_address))
            return True

        logging.info("set addr({}, {}) = {}".format(encode_hex(node), coin_type, target_address))
        return write_with_policy("set_address", resolver.set_address, node, coin_type, desired)

    def current_reverse_name(self, network_id, reverse_node):
        '''name() on whatever resolver the reverse node points at, "" when unset'''
        if reverse_node is None or bytes(reverse_node) == EMPTY_NODE:
            return ""
        registry = self.ownership.registry(network_id)
        resolver_address = normalize_address(registry.resolver_of(reverse_node))
        if resolver_address is None:
            return ""
        resolver = self.provider.resolver(network_id, resolver_address)
        return call_with_policy("read_name", resolver.name, reverse_node) or ""

    def ensure_reverse_record(self, network_id, identity, node, name):
        '''
        description: primary name through an addr.reverse style registrar (ens L1, basenames)
        param: identity address whose primary name is set
        param: node forward node, its resolver is attached to the reverse node
        return True on success or no-op, False when unavailable or setNameForAddr failed
        '''
        services = self.ownership.services(network_id)
        if services.reverse_registrar is None:
            logging.error("network {} has no reverse registrar".format(network_id))
            return False
        registrar = self.provider.reverse_registrar(network_id, services.reverse_registrar)

        reverse_node = call_with_policy("read_reverse_node", registrar.reverse_node_of, identity)
        if self.current_reverse_name(network_id, reverse_node) == name:
            logging.info("reverse name of {} already {}, skip".format(identity, name))
            return True

        resolver = self.ownership.resolver_for(network_id, node) or ZERO_ADDRESS
        logging.info("set reverse name of {} = {} resolver={}".format(identity, name, resolver))
        return write_with_policy(
            "set_reverse_name", registrar.set_name_for_addr, identity, identity, resolver, name)

    def ensure_l2_reverse_record(self, network_id, identity, name):
        '''
        description: primary name through an ENSIP-19 L2 reverse registrar
        return True on success or no-op, False when unavailable or setNameForAddr failed
        '''
        services = self.ownership.services(network_id)
        if services.reverse_registrar is None:
            logging.error("network {} has no reverse registrar".format(network_id))
            return False
        registrar = self.provider.l2_reverse_registrar(network_id, services.reverse_registrar)

        current = call_with_policy("read_name", registrar.name_for_addr, identity)
        if current == name:
            logging.info("L2 reverse name of {} already {}, skip".format(identity, name))
            return True

        logging.info("set L2 reverse name of {} = {}".format(identity, name))
        return write_with_policy("set_reverse_name", registrar.set_name_for_addr, identity, name)

    def ensure_basename_alias(self, network_id, identity, alias_name):
        '''
        description: text(reverse_node, "basename") = alias_name on the public resolver
        return True on success or no-op, False when unavailable or setText failed
        '''
        services = self.ownership.services(network_id)
        if services.public_resolver is None or services.reverse_registrar is None:
            logging.error("network {} has no public resolver / reverse registrar for basename".format(network_id))
            return False
        registrar = self.provider.reverse_registrar(network_id, services.reverse_registrar)
        reverse_node = call_with_policy("read_reverse_node", registrar.reverse_node_of, identity)
        if reverse_node is None or bytes(reverse_node) == EMPTY_NODE:
            logging.error("no reverse node for {} on network {}".format(identity, network_id))
            return False

        resolver = self.provider.resolver(network_id, services.public_resolver)
        current = call_with_policy("read_text", resolver.text, reverse_node, BASENAME_TEXT_KEY)
        if current == alias_name:
            logging.info("basename of {} already {}, skip".format(identity, alias_name))
            return True

        logging.info("set basename of {} = {}".format(identity, alias_name))
        return write_with_policy(
            "set_basename_text", resolver.set_text, reverse_node, BASENAME_TEXT_KEY, alias_name)

    def ensure_owner(self, network_id, node, new_owner):
        '''
        description: registry setOwner on an unwrapped node
        return True on success or no-op, False when setOwner failed
        '''
        current = self.ownership.owner_of(network_id, node, wrapped=False)
        if same_address(current, new_owner):
            logging.info("node {} already owned by {}, skip".format(encode_hex(node), new_owner))
            return True
        registry = self.ownership.registry(network_id)
        logging.info("transfer node {} from {} to {}".format(encode_hex(node), current, new_owner))
        return write_with_policy("set_owner", registry.set_owner, node, new_owner)
