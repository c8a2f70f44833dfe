#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-10 10:40:52
LastEditors: Zella Zhong
LastEditTime: 2024-10-16 18:22:10
FilePath: /name_binding/src/model/resolver_model.py
Description: public resolver / basenames L2Resolver model
'''
from model.contract_model import ContractModel

# multi-coin addr(bytes32,uint256) only, the legacy addr(bytes32) overload is not declared
RESOLVER_ABI = [
    {
        "inputs": [{"name": "node", "type": "bytes32"}, {"name": "coinType", "type": "uint256"}],
        "name": "addr",
        "outputs": [{"name": "", "type": "bytes"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"name": "node", "type": "bytes32"}, {"name": "coinType", "type": "uint256"}, {"name": "a", "type": "bytes"}],
        "name": "setAddr",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {"inputs": [{"name": "node", "type": "bytes32"}], "name": "name", "outputs": [{"name": "", "type": "string"}], "stateMutability": "view", "type": "function"},
    {"inputs": [{"name": "node", "type": "bytes32"}, {"name": "key", "type": "string"}], "name": "text", "outputs": [{"name": "", "type": "string"}], "stateMutability": "view", "type": "function"},
    {
        "inputs": [{"name": "node", "type": "bytes32"}, {"name": "key", "type": "string"}, {"name": "value", "type": "string"}],
        "name": "setText",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
]


class ResolverModel(ContractModel):
    '''
    description: ResolverModel
    '''
    ABI = RESOLVER_ABI

    def address(self, node, coin_type):
        '''
        description: addr(node, coinType)
        return bytes, empty when unset
        '''
        return self.call(self.contract.functions.addr(node, coin_type))

    def set_address(self, node, coin_type, value):
        return self.transact(self.contract.functions.setAddr(node, coin_type, value))

    def name(self, node):
        return self.call(self.contract.functions.name(node))

    def text(self, node, key):
        return self.call(self.contract.functions.text(node, key))

    def set_text(self, node, key, value):
        return self.transact(self.contract.functions.setText(node, key, value))
