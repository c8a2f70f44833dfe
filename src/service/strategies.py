#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-14 10:33:27
LastEditors: Zella Zhong
LastEditTime: 2024-10-20 18:03:41
FilePath: /name_binding/src/service/strategies.py
Description: per chain family binding steps (ens L1 + wrapper, ENSIP-19 L2, basenames)
'''
import logging

from service.chain_directory import FAMILY_BASE, FAMILY_L1, FAMILY_L2, family_of


class BindingStrategy():
    '''
    description: L1 registry + name wrapper, reverse through addr.reverse
    '''
    family = FAMILY_L1

    def __init__(self, writer):
        self.writer = writer

    def ensure_subname(self, network_id, parent_node, label, owner):
        return self.writer.ensure_subname(network_id, parent_node, label, owner)

    def ensure_forward(self, network_id, node, coin_type, target_address):
        return self.writer.ensure_forward_record(network_id, node, coin_type, target_address)

    def ensure_reverse(self, network_id, identity, node, name):
        return self.writer.ensure_reverse_record(network_id, identity, node, name)


class L2Strategy(BindingStrategy):
    '''
    description: ENSIP-19, the L2 reverse registrar keeps the primary name
    '''
    family = FAMILY_L2

    def ensure_reverse(self, network_id, identity, node, name):
        return self.writer.ensure_l2_reverse_record(network_id, identity, name)


class BaseStrategy(BindingStrategy):
    '''
    description: basenames, primary name plus the "basename" text alias
    '''
    family = FAMILY_BASE

    def ensure_reverse(self, network_id, identity, node, name):
        if not self.writer.ensure_reverse_record(network_id, identity, node, name):
            return False
        return self.writer.ensure_basename_alias(network_id, identity, name)


STRATEGIES = {
    FAMILY_L1: BindingStrategy,
    FAMILY_L2: L2Strategy,
    FAMILY_BASE: BaseStrategy,
}


def select_strategy(network_id, writer):
    '''
    description: pick the binding strategy from the network family, unknown networks are L1
    return BindingStrategy
    '''
    family = family_of(network_id)
    logging.debug("network {} uses {} strategy".format(network_id, family))
    return STRATEGIES[family](writer)
