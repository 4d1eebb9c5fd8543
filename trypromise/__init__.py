# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa
from .decorators import wrap_promise
from .deferred import Deferred
from .errors import InvalidArgumentError
from .promise import Promise, TimeoutError
from .try_promise import try_promise
from .util import is_future, is_thenable, type_tag

__all__ = ['Deferred', 'InvalidArgumentError', 'Promise', 'TimeoutError',
           'is_future', 'is_thenable', 'try_promise', 'type_tag',
           'wrap_promise']
