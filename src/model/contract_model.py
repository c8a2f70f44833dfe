#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-10 09:12:40
LastEditors: Zella Zhong
LastEditTime: 2024-10-19 20:31:06
FilePath: /name_binding/src/model/contract_model.py
Description: web3 contract read / signed write with receipt wait
'''
import logging

from web3 import Web3
from ratelimit import limits, sleep_and_retry
from eth_utils import encode_hex

DEFAULT_RECEIPT_TIMEOUT = 120


class TransactionFailed(Exception):
    '''mined with status 0'''
    def __init__(self, tx_hash, receipt=None):
        super(TransactionFailed, self).__init__("transaction reverted: {}".format(tx_hash))
        self.tx_hash = tx_hash
        self.receipt = receipt


class ContractModel():
    '''
    description: ContractModel, base of every name service contract model
    '''
    ABI = []

    def __init__(self, w3, address, account=None, receipt_timeout=DEFAULT_RECEIPT_TIMEOUT):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.account = account
        self.receipt_timeout = receipt_timeout
        self.contract = w3.eth.contract(address=self.address, abi=self.ABI)

    @sleep_and_retry
    @limits(calls=25, period=1)
    def call(self, function):
        '''
        description: eth_call a bound contract function
        return decoded output
        '''
        return function.call()

    @sleep_and_retry
    @limits(calls=5, period=1)
    def transact(self, function):
        '''
        description: sign locally, send, block until mined
        return receipt
        '''
        if self.account is None:
            raise ValueError("{} has no signer, read only".format(self.__class__.__name__))

        sender = self.account.address
        tx = function.build_transaction({
            "from": sender,
            "nonce": self.w3.eth.get_transaction_count(sender, "pending"),
            "chainId": self.w3.eth.chain_id,
        })
        signed = self.account.sign_transaction(tx)
        tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        logging.info("{} sent tx {} from {}".format(self.__class__.__name__, encode_hex(tx_hash), sender))

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        if receipt["status"] != 1:
            raise TransactionFailed(encode_hex(tx_hash), receipt)
        logging.info("tx {} mined in block {}".format(encode_hex(tx_hash), receipt["blockNumber"]))
        return receipt
