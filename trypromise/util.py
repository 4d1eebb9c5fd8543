# -*- coding: utf-8 -*-

import datetime
import numbers
import re


# Checked in order: bool must come before Number.
_TYPE_TAGS = (
    (bool, 'Boolean'),
    (numbers.Number, 'Number'),
    (str, 'String'),
    ((list, tuple), 'Array'),
    (BaseException, 'Error'),
    (datetime.date, 'Date'),
    (re.Pattern, 'RegExp'),
)


def is_thenable(value):
    """Check if an object can be chained, like a Promise, or is a "result".

    The promise module uses this function to differentiate "chainable" objects
    and direct return values, when using a callback who can returns both.

    Classes are never thenable: a class defining `then()` is a plain value.

    Returns:
        boolean: True if the value has an attribute 'then' who is callable.
            False if not.
    Raises:
        *: any error raised by the `then` attribute lookup, except
            AttributeError.
    """
    if isinstance(value, type):
        return False
    return callable(getattr(value, 'then', None))


def is_future(value):
    """Check if an object behaves like a standard library future.

    Both `concurrent.futures.Future` and `asyncio.Future` match: they can't be
    chained with `then()`, but notify their completion through
    `add_done_callback()`.

    Returns:
        boolean: True if the value is not a class and has callable
            'add_done_callback', 'result' and 'exception' attributes.
    """
    if isinstance(value, type):
        return False
    return all(callable(getattr(value, name, None))
               for name in ('add_done_callback', 'result', 'exception'))


def follow(value, fulfill, reject):
    """Settle with `value`, waiting for it first if it's asynchronous.

    Thenables and futures are followed until a plain value is reached, which
    is passed to `fulfill()`. Errors are passed to `reject()`.

    Args:
        value: a plain value, a thenable or a future.
        fulfill (callable): called with the final value.
        reject (callable): called with the error.
    Raises:
        *: errors raised while inspecting `value`, or by its `then()` or
            `add_done_callback()` method. Errors raised by a nested value are
            passed to `reject()` instead.
    """
    def on_fulfilled(result):
        try:
            follow(result, fulfill, reject)
        except Exception as error:
            reject(error)

    def on_future_done(future):
        try:
            result = future.result()
        except BaseException as error:
            return reject(error)
        on_fulfilled(result)

    if is_thenable(value):
        value.then(on_fulfilled, reject)
    elif is_future(value):
        value.add_done_callback(on_future_done)
    else:
        fulfill(value)


def type_tag(value):
    """Returns a stable tag describing the runtime type of a value.

    Tags have the form "[object <Kind>]". The kinds are enumerated: 'Null',
    'Function', 'Boolean', 'Number', 'String', 'Array', 'Error', 'Date' and
    'RegExp'. Any other value (dict, instance of a custom class, ...) is
    tagged as '[object Object]'.

    Args:
        value: any object.
    Returns:
        str: the type tag.
    """
    if value is None:
        return '[object Null]'
    if callable(value):
        return '[object Function]'
    for types, kind in _TYPE_TAGS:
        if isinstance(value, types):
            return '[object %s]' % kind
    return '[object Object]'
