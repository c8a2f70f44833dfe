#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-10 10:02:17
LastEditors: Zella Zhong
LastEditTime: 2024-10-16 18:20:44
FilePath: /name_binding/src/model/registry_model.py
Description: ENS registry (and basenames registry) model
'''
from model.contract_model import ContractModel

REGISTRY_ABI = [
    {"inputs": [{"name": "node", "type": "bytes32"}], "name": "owner", "outputs": [{"name": "", "type": "address"}], "stateMutability": "view", "type": "function"},
    {"inputs": [{"name": "node", "type": "bytes32"}], "name": "resolver", "outputs": [{"name": "", "type": "address"}], "stateMutability": "view", "type": "function"},
    {
        "inputs": [
            {"name": "node", "type": "bytes32"},
            {"name": "label", "type": "bytes32"},
            {"name": "owner", "type": "address"},
            {"name": "resolver", "type": "address"},
            {"name": "ttl", "type": "uint64"}
        ],
        "name": "setSubnodeRecord",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {"inputs": [{"name": "node", "type": "bytes32"}, {"name": "owner", "type": "address"}], "name": "setOwner", "outputs": [], "stateMutability": "nonpayable", "type": "function"},
]


class RegistryModel(ContractModel):
    '''
    description: RegistryModel
    '''
    ABI = REGISTRY_ABI

    def owner_of(self, node):
        return self.call(self.contract.functions.owner(node))

    def resolver_of(self, node):
        return self.call(self.contract.functions.resolver(node))

    def create_subnode(self, node, label_hash, owner, resolver, ttl=0):
        '''
        description: setSubnodeRecord, caller must own node
        param: node parent bytes32
        param: label_hash keccak256(label)
        '''
        return self.transact(self.contract.functions.setSubnodeRecord(node, label_hash, owner, resolver, ttl))

    def set_owner(self, node, owner):
        return self.transact(self.contract.functions.setOwner(node, owner))
