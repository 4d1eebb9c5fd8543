# -*- coding: utf-8 -*-

from functools import partial, wraps

from .try_promise import try_promise


def wrap_promise(f):
    """Decorator who converts the result in a Promise object.

    The decorated function is called through `try_promise()`: if it returns a
    thenable or a future, the Promise follows it. If it raises, the Promise is
    rejected. Else, the Promise is fulfilled with the returned value.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        return try_promise(partial(f, *args, **kwargs))

    return wrapper
