#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-08 14:10:02
LastEditors: Zella Zhong
LastEditTime: 2024-10-14 11:32:50
FilePath: /name_binding/src/setting/filelogger.py
Description: file logger, rotate by day
'''
import os
import logging
from logging.handlers import TimedRotatingFileHandler

LOG_FORMAT = "[%(asctime)s][%(levelname)s][%(filename)s:%(lineno)d] %(message)s"

_log_path = "./log"
_file_handler = None


def InitLogger(config):
    '''
    description: install console handler and remember log path
    param: config loaded by setting.load_settings
    '''
    global _log_path
    _log_path = config["server"]["log_path"]
    level = config["server"].get("log_level", "INFO")

    root = logging.getLogger()
    root.setLevel(level)
    has_console = False
    for handler in root.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            has_console = True
    if not has_console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(console)


def SetLoggerName(name):
    '''
    description: write records into {log_path}/{name}.log, one file per day
    param: name process name
    '''
    global _file_handler
    if not os.path.exists(_log_path):
        os.makedirs(_log_path)

    root = logging.getLogger()
    if _file_handler is not None:
        root.removeHandler(_file_handler)
        _file_handler.close()

    _file_handler = TimedRotatingFileHandler(
        os.path.join(_log_path, "{}.log".format(name)),
        when="midnight",
        backupCount=7,
        encoding="utf-8")
    _file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_file_handler)
    return _file_handler
