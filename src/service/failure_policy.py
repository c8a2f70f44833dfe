#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-12 11:05:48
LastEditors: Zella Zhong
LastEditTime: 2024-10-18 17:51:30
FilePath: /name_binding/src/service/failure_policy.py
Description: value each remote operation falls back to when the call raises
'''
import logging
from types import MappingProxyType

# operation -> value returned instead of raising
#   is_wrapped:        a misbehaving wrapper is treated as absent, take the registry path
#   read_address:      unreadable forward record counts as unset, write it
#   read_name:         unreadable reverse name counts as unset, write it
#   read_text:         unreadable text record counts as unset, write it
#   read_reverse_node: registrar could not name the reverse node, nothing to compare against
#   create_subnode:    writer reports False, orchestrator raises SubnameCreationFailed
#   set_address:       writer reports False, orchestrator raises ForwardResolutionFailed
#   set_reverse_name:  writer reports False, orchestrator raises ReverseResolutionFailed
#   set_basename_text: writer reports False, orchestrator raises ReverseResolutionFailed
#   set_owner:         writer reports False, orchestrator raises OwnershipTransferFailed
# Registry owner / resolver reads are not listed: authorization depends on them.
FAILURE_POLICY = MappingProxyType({
    "is_wrapped": False,
    "read_address": b"",
    "read_name": "",
    "read_text": "",
    "read_reverse_node": None,
    "create_subnode": False,
    "set_address": False,
    "set_reverse_name": False,
    "set_basename_text": False,
    "set_owner": False,
})


def call_with_policy(operation, func, *args):
    '''
    description: run a remote call, on any error log it and return the policy value
    param: operation key of FAILURE_POLICY
    param: func remote call
    return func(*args) or FAILURE_POLICY[operation]
    '''
    fallback = FAILURE_POLICY[operation]
    try:
        return func(*args)
    except Exception as ex:
        logging.exception(ex)
        logging.error("{} failed, fall back to {!r}".format(operation, fallback))
        return fallback


def write_with_policy(operation, func, *args):
    '''
    description: run a remote write
    return True when it went through, else FAILURE_POLICY[operation]
    '''
    try:
        func(*args)
        return True
    except Exception as ex:
        logging.exception(ex)
        logging.error("{} failed, report {!r}".format(operation, FAILURE_POLICY[operation]))
        return FAILURE_POLICY[operation]
