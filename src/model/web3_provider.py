#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-11 16:30:11
LastEditors: Zella Zhong
LastEditTime: 2024-10-20 10:12:48
FilePath: /name_binding/src/model/web3_provider.py
Description: hands out contract models per (network, address), one signer for every network
'''
import logging

from web3 import Web3
from eth_account import Account

import setting
from model.contract_model import DEFAULT_RECEIPT_TIMEOUT
from model.registry_model import RegistryModel
from model.resolver_model import ResolverModel
from model.name_wrapper_model import NameWrapperModel
from model.reverse_registrar_model import ReverseRegistrarModel, L2ReverseRegistrarModel


class Web3Provider():
    '''
    description: Web3Provider
    '''
    def __init__(self, rpc_urls, private_key=None, receipt_timeout=DEFAULT_RECEIPT_TIMEOUT):
        self.rpc_urls = dict(rpc_urls)
        self.account = Account.from_key(private_key) if private_key else None
        self.receipt_timeout = receipt_timeout
        self._web3 = {}
        self._models = {}

    @classmethod
    def from_settings(cls, read_only=False):
        '''
        description: build from setting.RPC_SETTINGS / SIGNER_SETTINGS, call setting.load_settings first
        '''
        private_key = None if read_only else setting.get_private_key()
        return cls(
            setting.RPC_SETTINGS,
            private_key=private_key,
            receipt_timeout=setting.SIGNER_SETTINGS["receipt_timeout"])

    @property
    def caller(self):
        if self.account is None:
            return None
        return self.account.address

    def web3(self, network_id):
        if network_id not in self._web3:
            if network_id not in self.rpc_urls:
                raise ValueError("No rpc_url configured for network {}".format(network_id))
            logging.info("connect network {} rpc".format(network_id))
            self._web3[network_id] = Web3(Web3.HTTPProvider(self.rpc_urls[network_id]))
        return self._web3[network_id]

    def _model(self, model_class, network_id, address):
        key = (model_class.__name__, network_id, address.lower())
        if key not in self._models:
            self._models[key] = model_class(
                self.web3(network_id), address,
                account=self.account, receipt_timeout=self.receipt_timeout)
        return self._models[key]

    def registry(self, network_id, address):
        return self._model(RegistryModel, network_id, address)

    def resolver(self, network_id, address):
        return self._model(ResolverModel, network_id, address)

    def name_wrapper(self, network_id, address):
        return self._model(NameWrapperModel, network_id, address)

    def reverse_registrar(self, network_id, address):
        return self._model(ReverseRegistrarModel, network_id, address)

    def l2_reverse_registrar(self, network_id, address):
        return self._model(L2ReverseRegistrarModel, network_id, address)
