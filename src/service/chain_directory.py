#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-09 14:02:33
LastEditors: Zella Zhong
LastEditTime: 2024-10-21 15:47:09
FilePath: /name_binding/src/service/chain_directory.py
Description: well-known name service addresses and coin types per network
'''
import logging
from collections import namedtuple
from types import MappingProxyType

from eth_utils import is_address, to_checksum_address

FAMILY_L1 = "l1"
FAMILY_L2 = "l2"
FAMILY_BASE = "base"

MAINNET = 1
SEPOLIA = 11155111
OPTIMISM = 10
OPTIMISM_SEPOLIA = 11155420
ARBITRUM = 42161
ARBITRUM_SEPOLIA = 421614
LINEA = 59144
LINEA_SEPOLIA = 59141
SCROLL = 534352
SCROLL_SEPOLIA = 534351
BASE = 8453
BASE_SEPOLIA = 84532

L1_NETWORKS = frozenset([MAINNET, SEPOLIA])
L2_NETWORKS = frozenset([
    OPTIMISM, OPTIMISM_SEPOLIA,
    ARBITRUM, ARBITRUM_SEPOLIA,
    LINEA, LINEA_SEPOLIA,
    SCROLL, SCROLL_SEPOLIA,
])
BASE_NETWORKS = frozenset([BASE, BASE_SEPOLIA])
TESTNETS = frozenset([SEPOLIA, OPTIMISM_SEPOLIA, ARBITRUM_SEPOLIA, LINEA_SEPOLIA, SCROLL_SEPOLIA, BASE_SEPOLIA])

COIN_TYPE_ETH = 60

SERVICE_FIELDS = ("registry", "public_resolver", "name_wrapper", "reverse_registrar", "coin_type")

ServiceSet = namedtuple("ServiceSet", ("network_id",) + SERVICE_FIELDS)
# absent capabilities are None, never the zero address


def evm_coin_type(network_id):
    '''ENSIP-11 coin type of an EVM chain'''
    if network_id == MAINNET:
        return COIN_TYPE_ETH
    return (0x80000000 | network_id) & 0xffffffff


def family_of(network_id):
    '''
    description: chain family a network belongs to, unknown networks are l1
    return family
    '''
    if network_id in BASE_NETWORKS:
        return FAMILY_BASE
    if network_id in L2_NETWORKS:
        return FAMILY_L2
    return FAMILY_L1


# | Contract            | Mainnet                                     |
# | ------------------- | ------------------------------------------- |
# | Registry            | 0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e  |
# | PublicResolver      | 0x231b0Ee14048e9dCcD1d247744d114a4EB5E8E63  |
# | NameWrapper         | 0xD4416b13d2b3a9aBae7AcD5D6C2BbDBE25686401  |
# | ReverseRegistrar    | 0xa58E81fe9b61B5c3fE2AFD33CF304c454AbFc7Cb  |
ENS_REGISTRY = "0x00000000000c2e074ec69a0dfb2997ba6c7d2e1e"
# ENSIP-19 L2ReverseRegistrar, one address on every L2 mainnet, another on every L2 testnet
L2_REVERSE_REGISTRAR = "0x0000000000d8e504002cc26e3ec46d81971c1664"
L2_REVERSE_REGISTRAR_TESTNET = "0x00000beef055f7934784d6d81b6bc86665630dba"

DEFAULT_TABLE = {
    MAINNET: {
        "registry": ENS_REGISTRY,
        "public_resolver": "0x231b0ee14048e9dccd1d247744d114a4eb5e8e63",
        "name_wrapper": "0xd4416b13d2b3a9abae7acd5d6c2bbdbe25686401",
        "reverse_registrar": "0xa58e81fe9b61b5c3fe2afd33cf304c454abfc7cb",
        "coin_type": COIN_TYPE_ETH,
    },
    SEPOLIA: {
        "registry": ENS_REGISTRY,
        "public_resolver": "0x8fade66b79cc9f707ab26799354482eb93a5b7dd",
        "name_wrapper": "0x0635513f179d50a207757e05759cbd106d7dfce8",
        "reverse_registrar": "0xa0a1abcdae1a2a4a2ef8e9113ff0e02dd81dc0c6",
        "coin_type": COIN_TYPE_ETH,
    },
    # Basenames: Registry, L2Resolver, ReverseRegistrar. No name wrapper on base.
    BASE: {
        "registry": "0xb94704422c2a1e396835a571837aa5ae53285a95",
        "public_resolver": "0xc6d566a56a1aff6508b41f6c90ff131615583bcd",
        "reverse_registrar": "0x79ea96012eea67a83431f1701b3dff7e37f9e282",
        "coin_type": evm_coin_type(BASE),
    },
    BASE_SEPOLIA: {
        "registry": "0x1493b2567056c2181630115660963e13a8e32735",
        "public_resolver": "0x6533c94869d28faa8df77cc63f9e2b2d6cf77eba",
        "reverse_registrar": "0x876ef94ce0773052a2f81921e70ff25a5e76841f",
        "coin_type": evm_coin_type(BASE_SEPOLIA),
    },
    # Linea Name Service: ENS registry + PublicResolver deployed on Linea,
    # primary names through the ENSIP-19 registrar
    LINEA: {
        "registry": "0x50130b669b28c339991d8676fa73cf122a121267",
        "public_resolver": "0x86c5aed9f27837074612288610fb98ccc1733126",
        "reverse_registrar": L2_REVERSE_REGISTRAR,
        "coin_type": evm_coin_type(LINEA),
    },
}


def l2_reverse_registrar_of(network_id):
    '''ENSIP-19 registrar address of an L2, testnets have their own deployment'''
    if network_id in TESTNETS:
        return L2_REVERSE_REGISTRAR_TESTNET
    return L2_REVERSE_REGISTRAR


def _override_defaults(network_id):
    '''
    description: fields an override starts from when the network has no table entry,
    an L2 override only has to name its registry and resolver
    '''
    defaults = {"coin_type": evm_coin_type(network_id)}
    if network_id in L2_NETWORKS:
        defaults["reverse_registrar"] = l2_reverse_registrar_of(network_id)
    return defaults


def _normalize_entry(network_id, fields):
    entry = {"network_id": network_id}
    for field in SERVICE_FIELDS:
        value = fields.get(field)
        if field == "coin_type":
            entry[field] = None if value is None else int(value)
            continue
        if value is None or value == "":
            entry[field] = None
            continue
        if not is_address(value):
            raise ValueError("network {} {} is not an address: {}".format(network_id, field, value))
        if int(value, 16) == 0:
            entry[field] = None
            continue
        entry[field] = to_checksum_address(value)
    return ServiceSet(**entry)


class ChainDirectory():
    '''
    description: immutable network_id -> ServiceSet table, built once at start
    '''
    def __init__(self, table=None, overrides=None):
        merged = {}
        for network_id, fields in (table if table is not None else DEFAULT_TABLE).items():
            merged[network_id] = dict(fields)
        for network_id, fields in (overrides or {}).items():
            logging.info("chain directory override network={} fields={}".format(network_id, sorted(fields)))
            if network_id not in merged:
                merged[network_id] = _override_defaults(network_id)
            merged[network_id].update(fields)

        self._services = MappingProxyType({
            network_id: _normalize_entry(network_id, fields) for network_id, fields in merged.items()
        })

    def services_for(self, network_id):
        '''
        description: pure lookup, unknown networks get every field absent
        return ServiceSet
        '''
        services = self._services.get(network_id)
        if services is None:
            return ServiceSet(network_id, None, None, None, None, None)
        return services

    def is_supported(self, network_id):
        return self.services_for(network_id).registry is not None
