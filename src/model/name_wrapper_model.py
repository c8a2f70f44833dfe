#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-10 11:15:03
LastEditors: Zella Zhong
LastEditTime: 2024-10-16 18:25:37
FilePath: /name_binding/src/model/name_wrapper_model.py
Description: ENS NameWrapper (ERC1155) model
'''
from model.contract_model import ContractModel

NAME_WRAPPER_ABI = [
    {"inputs": [{"name": "id", "type": "uint256"}], "name": "ownerOf", "outputs": [{"name": "owner", "type": "address"}], "stateMutability": "view", "type": "function"},
    {"inputs": [{"name": "node", "type": "bytes32"}], "name": "isWrapped", "outputs": [{"name": "", "type": "bool"}], "stateMutability": "view", "type": "function"},
    {
        "inputs": [
            {"name": "parentNode", "type": "bytes32"},
            {"name": "label", "type": "string"},
            {"name": "owner", "type": "address"},
            {"name": "resolver", "type": "address"},
            {"name": "ttl", "type": "uint64"},
            {"name": "fuses", "type": "uint32"},
            {"name": "expiry", "type": "uint64"}
        ],
        "name": "setSubnodeRecord",
        "outputs": [{"name": "node", "type": "bytes32"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
]


class NameWrapperModel(ContractModel):
    '''
    description: NameWrapperModel, wrapped node ownership is keyed by uint256(node)
    '''
    ABI = NAME_WRAPPER_ABI

    def owner_of(self, token_id):
        return self.call(self.contract.functions.ownerOf(token_id))

    def is_wrapped(self, node):
        return self.call(self.contract.functions.isWrapped(node))

    def create_subnode(self, parent_node, label, owner, resolver, ttl=0, fuses=0, expiry=0):
        return self.transact(self.contract.functions.setSubnodeRecord(
            parent_node, label, owner, resolver, ttl, fuses, expiry))
