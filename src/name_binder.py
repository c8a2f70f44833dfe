#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-16 19:25:08
LastEditors: Zella Zhong
LastEditTime: 2024-10-21 16:41:33
FilePath: /name_binding/src/name_binder.py
Description: bind / look up a name from the command line
'''
import os
import sys
import logging
import argparse

import setting
import setting.filelogger as logger

from model.web3_provider import Web3Provider
from service.exceptions import NameBindingError
from service.name_grammar import node_hex
from service.orchestrator import NameBinder


def parse_args(argv):
    parser = argparse.ArgumentParser(prog="name_binder", description="bind an ENS / basenames name to an address")
    parser.add_argument("--env", default="production", choices=sorted(setting.CONFIG_FILES))
    parser.add_argument("--config", default=None, help="config file, overrides --env default path")
    sub = parser.add_subparsers(dest="command", required=True)

    bind = sub.add_parser("bind", help="subname + forward record + primary name")
    bind.add_argument("network_id", type=int)
    bind.add_argument("target")
    bind.add_argument("name")
    bind.add_argument("--forward-only", action="store_true", help="stop after the forward record")

    handover = sub.add_parser("hand-over", help="transfer an unwrapped node")
    handover.add_argument("network_id", type=int)
    handover.add_argument("name")
    handover.add_argument("new_owner")

    lookup = sub.add_parser("lookup", help="show owner / resolver / address of a name")
    lookup.add_argument("network_id", type=int)
    lookup.add_argument("name")
    return parser.parse_args(argv)


def run(args):
    provider = Web3Provider.from_settings(read_only=(args.command == "lookup"))
    binder = NameBinder(provider)
    if args.command == "bind":
        if args.forward_only:
            result = binder.bind_forward_only(args.network_id, args.target, args.name)
        else:
            result = binder.bind_name(args.network_id, args.target, args.name)
        logging.info("{} node={} family={} state={}".format(
            result.name, node_hex(result.node), result.family, result.state))
    elif args.command == "hand-over":
        owner = binder.hand_over(args.network_id, args.name, args.new_owner)
        logging.info("{} owner={}".format(args.name, owner))
    else:
        result = binder.lookup(args.network_id, args.name)
        logging.info("{} node={} owner={} wrapped={} resolver={} address={}".format(
            result.name, node_hex(result.node), result.owner, result.wrapped, result.resolver, result.address))
    return 0


if __name__ == "__main__":
    args = parse_args(sys.argv[1:])
    config = setting.load_settings(env=args.env, config_file=args.config)
    if not os.path.exists(config["server"]["log_path"]):
        os.makedirs(config["server"]["log_path"])
    logger.InitLogger(config)
    logger.SetLoggerName("name_binder")
    try:
        sys.exit(run(args))
    except NameBindingError as ex:
        logging.error("name binding failed: {}".format(ex))
        sys.exit(1)
    except Exception as ex:
        logging.exception(ex)
        sys.exit(1)
