#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-08 13:52:24
LastEditors: Zella Zhong
LastEditTime: 2024-10-21 16:04:37
FilePath: /name_binding/src/setting/__init__.py
Description: load configurations and global setting
'''

import os
import logging
import toml


DEFAULT_RECEIPT_TIMEOUT = 120

Settings = {
    "env": "development",
}

# network_id(int) -> json-rpc url
RPC_SETTINGS = {}

SIGNER_SETTINGS = {
    "private_key_env": "NAME_BINDER_PRIVATE_KEY",
    "receipt_timeout": DEFAULT_RECEIPT_TIMEOUT,
}

# network_id(int) -> {field: value}, merged into the chain directory once
CHAIN_OVERRIDES = {}

CONFIG_FILES = {
    "development": "./config/development.toml",
    "testing": "/app/config/testing.toml",
    "production": "/app/config/production.toml",
}


def load_settings(env="development", config_file=None):
    """
    @description: load configurations from file
    @params: env, config_file (overrides the env default path)
    @return config
    """
    global Settings
    global RPC_SETTINGS
    global SIGNER_SETTINGS
    global CHAIN_OVERRIDES

    if config_file is None:
        if env not in CONFIG_FILES:
            raise ValueError("Unknown environment {}".format(env))
        config_file = CONFIG_FILES[env]

    config = toml.load(config_file)
    Settings["env"] = env
    RPC_SETTINGS = load_rpc_settings(config)
    SIGNER_SETTINGS = load_signer_settings(config)
    CHAIN_OVERRIDES = load_chain_overrides(config)
    return config


def load_rpc_settings(config):
    """
    @description: load rpc url configurations, keys are network ids
    @params: config
    @return rpc_settings
    """
    rpc_settings = {}
    for network_id, url in config.get("rpc_url", {}).items():
        try:
            rpc_settings[int(network_id)] = url
        except ValueError:
            logging.error("Ignore rpc_url entry with invalid network id: {}".format(network_id))
    return rpc_settings


def load_signer_settings(config):
    """
    @description: load signer configurations, the key itself stays in the environment
    @params: config
    @return signer_settings
    """
    signer = config.get("signer", {})
    return {
        "private_key_env": signer.get("private_key_env", "NAME_BINDER_PRIVATE_KEY"),
        "receipt_timeout": int(signer.get("receipt_timeout", DEFAULT_RECEIPT_TIMEOUT)),
    }


def load_chain_overrides(config):
    """
    @description: load per-network chain directory overrides
    @params: config
    @return chain_overrides
    """
    overrides = {}
    for network_id, fields in config.get("chain_overrides", {}).items():
        try:
            overrides[int(network_id)] = dict(fields)
        except ValueError:
            logging.error("Ignore chain_overrides entry with invalid network id: {}".format(network_id))
    return overrides


def get_private_key():
    '''
    description: read the signing key from the configured environment variable
    return private key (hex str)
    '''
    env_name = SIGNER_SETTINGS["private_key_env"]
    private_key = os.environ.get(env_name, "")
    if private_key == "":
        raise ValueError("Signing key is not set, export {}".format(env_name))
    return private_key
