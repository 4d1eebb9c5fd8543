# -*- coding: utf-8 -*-

from .promise import Promise


class Deferred(object):
    """Producer side of a Promise.

    A Deferred is the "creator" side of an async task, whereas a Promise
    represents the asynchronous value from the "consumer" side. It's useful
    when the code settling the Promise isn't known when the Promise is
    created.

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
        resolve (function): fulfills `promise` with its only argument.
        reject (function): rejects `promise` with its only argument.
    """

    def __init__(self, _name=None):
        self.promise = Promise(self._executor, _name=_name or 'DEFERRED')

    def _executor(self, resolve, reject):
        self.resolve = resolve
        self.reject = reject
