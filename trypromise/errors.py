# -*- coding: utf-8 -*-


class InvalidArgumentError(TypeError):
    """A value of the wrong type has been given instead of a callable."""
    pass
