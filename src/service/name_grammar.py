#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-09 10:40:18
LastEditors: Zella Zhong
LastEditTime: 2024-10-17 22:08:51
FilePath: /name_binding/src/service/name_grammar.py
Description: dotted name parsing and namehash (EIP-137)
'''
from eth_utils import encode_hex, keccak, to_bytes

from service.exceptions import InvalidNameFormat

EMPTY_NODE = b'\x00' * 32

# namehash('eth') = 0x93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae
ETH_NODE = "0x93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"
# namehash('addr.reverse')
ADDR_REVERSE_NODE = "0x91d1777781884d03a6757a803996e38de2a42967fb37eeaca72729271025a9e2"


def split_name(full_name):
    '''
    description: split "label.parent" at the first dot
    example: "app.domain.eth" -> ("app", "domain.eth")
    param: full_name
    return label, parent
    '''
    if not full_name:
        raise InvalidNameFormat("empty name")
    index = full_name.find(".")
    if index == -1:
        raise InvalidNameFormat("name has no parent: {}".format(full_name))
    label = full_name[:index]
    parent = full_name[index + 1:]
    if label == "":
        raise InvalidNameFormat("empty label: {}".format(full_name))
    if parent == "":
        raise InvalidNameFormat("empty parent: {}".format(full_name))
    return label, parent


def labelhash(label):
    '''keccak256 of a single label'''
    return keccak(text=label)


def child_node(parent_node, label):
    '''node(parent.label) = keccak256(node(parent) ++ keccak256(label))'''
    return keccak(parent_node + labelhash(label))


def namehash(name):
    '''
    description: fold a dotted name into its node, rightmost label first
    param: name
    return: bytes32
    '''
    node = EMPTY_NODE
    if name == "":
        return node
    for label in reversed(name.split(".")):
        node = child_node(node, label)
    return node


def name_coordinates(full_name):
    '''
    description: everything a binding needs to address the tree, computed once
    return label, parent, parent_node, node
    '''
    label, parent = split_name(full_name)
    parent_node = namehash(parent)
    node = child_node(parent_node, label)
    return label, parent, parent_node, node


def token_id(node):
    '''uint256(node), the token id used by the name wrapper'''
    return int.from_bytes(node, "big")


def reverse_node(address):
    '''
    description: [address].addr.reverse node
    param: address hex string
    return: bytes32
    '''
    addr = address.lower().replace("0x", "")
    label = keccak(addr.encode('utf-8'))
    return keccak(to_bytes(hexstr=ADDR_REVERSE_NODE) + label)


def node_hex(node):
    return encode_hex(node)
