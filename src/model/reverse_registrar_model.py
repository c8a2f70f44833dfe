#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-10 14:48:29
LastEditors: Zella Zhong
LastEditTime: 2024-10-20 09:57:13
FilePath: /name_binding/src/model/reverse_registrar_model.py
Description: reverse registrar models, L1 (ens / basenames) and ENSIP-19 L2
'''
from model.contract_model import ContractModel

REVERSE_REGISTRAR_ABI = [
    {"inputs": [{"name": "addr", "type": "address"}], "name": "node", "outputs": [{"name": "", "type": "bytes32"}], "stateMutability": "view", "type": "function"},
    {
        "inputs": [
            {"name": "addr", "type": "address"},
            {"name": "owner", "type": "address"},
            {"name": "resolver", "type": "address"},
            {"name": "name", "type": "string"}
        ],
        "name": "setNameForAddr",
        "outputs": [{"name": "", "type": "bytes32"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
]

L2_REVERSE_REGISTRAR_ABI = [
    {"inputs": [{"name": "addr", "type": "address"}], "name": "nameForAddr", "outputs": [{"name": "", "type": "string"}], "stateMutability": "view", "type": "function"},
    {
        "inputs": [{"name": "addr", "type": "address"}, {"name": "name", "type": "string"}],
        "name": "setNameForAddr",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
]


class ReverseRegistrarModel(ContractModel):
    '''
    description: ReverseRegistrarModel, reverse node lives under addr.reverse
    (basenames: under 80002105.reverse) and is asked from the contract
    '''
    ABI = REVERSE_REGISTRAR_ABI

    def reverse_node_of(self, identity):
        return self.call(self.contract.functions.node(identity))

    def set_name_for_addr(self, identity, owner, resolver, name):
        return self.transact(self.contract.functions.setNameForAddr(identity, owner, resolver, name))


class L2ReverseRegistrarModel(ContractModel):
    '''
    description: L2ReverseRegistrarModel, names are stored by the registrar itself
    '''
    ABI = L2_REVERSE_REGISTRAR_ABI

    def name_for_addr(self, identity):
        return self.call(self.contract.functions.nameForAddr(identity))

    def set_name_for_addr(self, identity, name):
        return self.transact(self.contract.functions.setNameForAddr(identity, name))
