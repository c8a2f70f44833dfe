#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Author: Zella Zhong
Date: 2024-10-09 10:21:45
LastEditors: Zella Zhong
LastEditTime: 2024-10-18 17:45:12
FilePath: /name_binding/src/service/exceptions.py
Description: name binding errors, each one names the stage it failed in
'''


class NameBindingError(Exception):
    '''
    description: base error of the name binding pipeline
    param: message
    param: stage the state being left when the failure happened
    '''
    def __init__(self, message="", stage=None):
        super(NameBindingError, self).__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self):
        if self.stage is None:
            return self.message
        return "[{}] {}".format(self.stage, self.message)


class InvalidNameFormat(NameBindingError):
    pass


class InvalidTarget(NameBindingError):
    pass


class UnsupportedNetwork(NameBindingError):
    pass


class NotAuthorized(NameBindingError):
    pass


class NodeOwnedByOther(NameBindingError):
    pass


class ResolverUnavailable(NameBindingError):
    pass


class SubnameCreationFailed(NameBindingError):
    pass


class ForwardResolutionFailed(NameBindingError):
    pass


class ReverseResolutionFailed(NameBindingError):
    pass


class OwnershipTransferFailed(NameBindingError):
    pass
