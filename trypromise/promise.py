# -*- coding: utf-8 -*-

import logging
from threading import Condition
from .util import follow

_logger = logging.getLogger(__name__)


class TimeoutError(Exception):
    """The Promise has not been settled within the time allowed."""
    pass


class Promise(object):
    """Deferred result of an operation, fulfilled or rejected only once.

    A Promise contains a value not yet known when the Promise is created. It
    allows to set callbacks who will be called as soon as the result is known.
    Any object with a callable `then` attribute (a "thenable") can be chained
    to a Promise, and is followed until it settles.

    All calls to the methods are thread-safe.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, executor, _name=None, _previous=None):
        """Constructor of the Promise.

        Generate the two settlement functions, then call the `executor`.
        The executor is fully executed before the constructor returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception, unless it's already settled.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `on_fulfilled()` should be called when the
                Promise is fulfilled and must accept the result's value as its
                only argument.
                The second, `on_rejected()`, should be called when an error
                occurs. Its argument should be an instance of `Exception`.
            _name (str): if set, name used when converted to text.
        """

        self._state = self.PENDING
        self._result = None
        self._error = None
        self._condition = Condition()
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous

        self._callbacks = []
        self._errbacks = []

        def on_fulfilled(result):
            with self._condition:
                if self._state != self.PENDING:
                    _logger.warning('Try to fulfill Promise %r already '
                                    'settled. New result will be ignored: %r',
                                    self, result)
                    return
                self._result = result
                self._state = self.FULFILLED
                self._condition.notify_all()

                callbacks = self._callbacks
                # Free the references
                self._callbacks = None
                self._errbacks = None

            for callback in callbacks:
                self._exec_callback(callback, result)

        def on_rejected(error):
            with self._condition:
                if self._state != self.PENDING:
                    _logger.warning('Try to reject Promise %r already settled.'
                                    ' New error will be ignored: %r',
                                    self, error)
                    return
                if not isinstance(error, BaseException):
                    # The value is chained like any error, but result() will
                    # raise a TypeError instead of it.
                    _logger.warning('Promise %r rejected with non-exception '
                                    'value: %r', self, error)
                self._error = error
                self._state = self.REJECTED
                self._condition.notify_all()

                errbacks = self._errbacks
                # Free the references
                self._callbacks = None
                self._errbacks = None

            for errback in errbacks:
                self._exec_callback(errback, error, is_errback=True)

        try:
            executor(on_fulfilled, on_rejected)
        except Exception as error:
            on_rejected(error)

    @property
    def state(self):
        """str: one of PENDING, FULFILLED or REJECTED."""
        with self._condition:
            return self._state

    def result(self, timeout=None):
        """Wait for the result and returns it as soon as it's available.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled. By default, it can wait indefinitely.
        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            *: If the promise is rejected, the rejection cause is raised.
        """
        with self._condition:
            self._condition.wait_for(self._is_settled, timeout)

            if self._state == self.PENDING:
                raise TimeoutError()
            elif self._state == self.REJECTED:
                raise self._error
            else:
                return self._result

    def exception(self, timeout=None):
        """Wait for the promise settlement and returns its error.

        Args:
            timeout (float, optional): if set, maximum time to wait the
                promise to be settled. By default, it can wait indefinitely.
        Returns:
            Exception: the error causing the rejection of the Promise.
            None: if the promise is fulfilled.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
        """
        with self._condition:
            self._condition.wait_for(self._is_settled, timeout)

            if self._state == self.PENDING:
                raise TimeoutError()
            return self._error

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be fulfilled with this value.
        - Another Promise, any object with a `then` method, or a future: when
            fulfilled or rejected, will transfer its status (state and
            result/error) to the Promise returned by this method. Nested
            thenables are followed until a plain value is reached.

        If a callback is not defined, the state of the self promise is
        transferred to the new promise (the state and the value/error).

        Args:
            on_fulfilled (callable, optional): This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                exception raised by the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """

        def chained_executor(fulfilled, rejected):

            def settle_with(handler, value):
                try:
                    follow(handler(value), fulfilled, rejected)
                except Exception as error:
                    rejected(error)

            def callback(result):
                if on_fulfilled is None:
                    fulfilled(result)
                else:
                    settle_with(on_fulfilled, result)

            def errback(error):
                if on_rejected is None:
                    rejected(error)
                else:
                    settle_with(on_rejected, error)

            self._add_callback(callback)
            self._add_errback(errback)

        if not on_rejected:
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not on_fulfilled:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))
        return Promise(chained_executor, _name=name, _previous=self)

    def catch(self, on_rejected):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable): Must take an argument instance of Exception
                (or one of its subclass). Will be called if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def safeguard(self):
        """Catch all errors and log them with the most details possible.

        If no error handler has been set (via then() or catch()), a rejected
        Promise is silently ignored.
        Calling `safeguard()` after all chains are set will catch these errors,
        and log them as ERROR, with the traceback when available.
        """
        def guard(error):
            if isinstance(error, BaseException):
                exc_info = (type(error), error, error.__traceback__)
            else:
                exc_info = None
            _logger.error('[SAFEGUARD] %s', self, exc_info=exc_info)

        self._add_errback(guard)

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        with self._condition:
            if self._state == self.REJECTED:
                state = 'R'
            elif self._state == self.FULFILLED:
                state = 'F'
            else:
                state = 'P'

        if self._previous:
            return '%s -> %s %s' % (self._previous._inner_print(), self._name,
                                    state)
        return '%s %s' % (self._name, state)

    @classmethod
    def resolve(cls, value):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a Promise, it's returned as
                is. If it's another thenable or a future, the new Promise
                follows it, until a plain value is reached.
        Returns:
            Promise: new Promise fulfilled with the value passed in parameter,
                or following it.
        """
        if isinstance(value, Promise):
            return value
        return cls(lambda ok, error: follow(value, ok, error),
                   _name='RESOLVE')

    @classmethod
    def reject(cls, reason):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: Exception set to the Promise
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda ok, error: error(reason), _name='REJECT')

    def _is_settled(self):
        return self._state != self.PENDING

    @staticmethod
    def _exec_callback(callback, value, is_errback=False):
        try:
            callback(value)
        except Exception:
            if is_errback:
                _logger.exception("Promise errback raise an exception!")
            else:
                _logger.exception("Promise callback raise an exception!")

    def _add_callback(self, callback):
        execute_now = False
        result = None

        with self._condition:
            if self._state == self.PENDING:
                self._callbacks.append(callback)
            elif self._state == self.FULFILLED:
                execute_now = True
                result = self._result

        if execute_now:
            self._exec_callback(callback, result)

    def _add_errback(self, errback):
        execute_now = False
        error = None

        with self._condition:
            if self._state == self.PENDING:
                self._errbacks.append(errback)
            elif self._state == self.REJECTED:
                execute_now = True
                error = self._error

        if execute_now:
            self._exec_callback(errback, error, is_errback=True)
