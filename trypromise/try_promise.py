# -*- coding: utf-8 -*-

from .deferred import Deferred
from .errors import InvalidArgumentError
from .promise import Promise
from .util import follow, type_tag


def try_promise(candidate):
    """Call a function and always get its outcome as a Promise.

    The caller doesn't have to know if the function raises, returns a value or
    returns an asynchronous result: all cases are converted into a Promise.

    - If `candidate` is not callable, the Promise is rejected with an
      `InvalidArgumentError`. The candidate is not called.
    - If `candidate()` raises an exception, the Promise is rejected with this
      exact exception.
    - If `candidate()` returns a thenable (a Promise or any object with a
      `then()` method) or a future (`concurrent.futures.Future`,
      `asyncio.Future`), the Promise follows it, and settles as it does.
    - Otherwise, the Promise is fulfilled with the returned value (`None`
      included).

    `candidate` is called only once, synchronously, without argument.

    Args:
        candidate (callable): function to call. Any other value is accepted,
            but results in a rejected Promise.
    Returns:
        Promise<*>: settled by the outcome of `candidate()`.
    """
    if not callable(candidate):
        return Promise.reject(InvalidArgumentError(
            'Expected a function but got %s' % type_tag(candidate)))

    try:
        result = candidate()
    except Exception as error:
        return Promise.reject(error)

    df = Deferred(_name='TRY')
    try:
        follow(result, df.resolve, df.reject)
    except Exception as error:
        # Reading `then`, or calling `then()` or `add_done_callback()`, has
        # raised.
        df.reject(error)
    return df.promise

